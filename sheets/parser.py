"""CSV parsing for the Programs sheet export.

The sheet is read positionally: column 0 is goals, column 9 is notes.  A
reordered upstream tab silently shifts every field; nothing here looks at the
header names.  The first non-empty row is always treated as the header and
dropped, even if it holds real data.
"""

import csv
import io
import logging

from sheets.models import PROGRAM_FIELDS, ProgramRecord

logger = logging.getLogger(__name__)


def _read_rows(csv_text: str) -> list[list[str]]:
    """Tokenize *csv_text*, skipping rows with no cells.

    Raises:
        csv.Error: If the text cannot be tokenized.
    """
    reader = csv.reader(io.StringIO(csv_text, newline=""), strict=True)
    return [row for row in reader if len(row) > 0]


def _row_to_record(row: list[str], index: int) -> ProgramRecord:
    cells = list(row[:len(PROGRAM_FIELDS)])
    cells += [""] * (len(PROGRAM_FIELDS) - len(cells))
    return ProgramRecord(id=f"program-{index}", **dict(zip(PROGRAM_FIELDS, cells)))


def parse_programs_csv(csv_text: str) -> list[ProgramRecord]:
    """Parse the Programs CSV export into records.

    Rows are kept only when the goals cell is non-blank.  Ids are assigned as
    ``program-<n>`` in the order of the surviving rows, so they are stable
    only within a single fetch.

    Args:
        csv_text: Raw CSV body.

    Returns:
        List of ProgramRecord, possibly empty.

    Raises:
        csv.Error: On malformed CSV (all-or-nothing, no partial result).
    """
    rows = _read_rows(csv_text)
    if not rows:
        logger.info("No data found in the sheet")
        return []

    data_rows = [row for row in rows[1:] if row[0] and row[0].strip()]
    return [_row_to_record(row, i) for i, row in enumerate(data_rows, start=1)]
