"""Date parsing and display formatting for sheet values.

Provides reusable functions for:
- Parsing the free-form date strings typed into the sheet
- Turning them into sortable timestamps
- Formatting them for the dashboard table
"""

from datetime import datetime, timezone
from typing import Optional

# Tried after ISO 8601, in order.
_FALLBACK_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def parse_sheet_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a sheet date cell.

    Accepts ISO 8601 first and then a few common spreadsheet formats.  Naive
    values are taken as UTC.

    Returns:
        A timezone-aware datetime, or None for empty/unparseable input.

    Examples:
        parse_sheet_date("2024-03-01") -> 2024-03-01 00:00:00+00:00
        parse_sheet_date("3/1/2024")   -> 2024-03-01 00:00:00+00:00
        parse_sheet_date("soon")       -> None
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    parsed: Optional[datetime] = None
    try:
        # fromisoformat() before 3.11 does not accept a "Z" suffix.
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_timestamp(value: Optional[str]) -> float:
    """Return a POSIX timestamp for *value*, or 0.0 when it cannot be parsed."""
    parsed = parse_sheet_date(value)
    return parsed.timestamp() if parsed is not None else 0.0


def format_date(value: Optional[str]) -> str:
    """Format a date cell for display, e.g. ``"Mar 1, 2024"``.

    Empty cells render as "-"; unparseable text is shown unchanged.
    """
    if not value:
        return "-"
    parsed = parse_sheet_date(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
