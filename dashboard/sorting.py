"""Column sort keys for the programs table.

Each sortable column maps to a key function.  Columns missing from
COLUMN_SORT_KEYS (``links``, or anything unknown) leave the order untouched.
All sorting goes through ``sorted`` so equal keys keep their fetch order in
both directions.
"""

from collections.abc import Callable, Sequence
from typing import Any

from sheets.models import ProgramRecord
from utils.formatting import date_timestamp

SORT_NONE = "none"
SORT_ASC = "asc"
SORT_DESC = "desc"

PRIORITY_RANK = {"P0": 0, "P1": 1, "P2": 2}
UNRANKED_PRIORITY = 999


def _text_key(column: str) -> Callable[[ProgramRecord], str]:
    return lambda p: p.get(column).lower()


def priority_rank(priority: str) -> int:
    return PRIORITY_RANK.get(priority, UNRANKED_PRIORITY)


COLUMN_SORT_KEYS: dict[str, Callable[[ProgramRecord], Any]] = {
    "goals": _text_key("goals"),
    "tasks": _text_key("tasks"),
    "team": _text_key("team"),
    "priority": lambda p: priority_rank(p.priority),
    "owner": _text_key("owner"),
    "status": _text_key("status"),
    "eta": lambda p: date_timestamp(p.eta),
    "completionDate": lambda p: date_timestamp(p.completion_date),
    "notes": _text_key("notes"),
}


def sort_programs(
    programs: Sequence[ProgramRecord],
    column: str,
    direction: str,
) -> list[ProgramRecord]:
    """Return a sorted copy of *programs*; the input is never mutated."""
    key = COLUMN_SORT_KEYS.get(column)
    if direction == SORT_NONE or key is None:
        return list(programs)
    return sorted(programs, key=key, reverse=direction == SORT_DESC)
