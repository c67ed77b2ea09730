"""
Programs table: column metadata, sort indicators and column resizing.

Column widths are a plain column -> pixels mapping seeded from
DEFAULT_COLUMN_WIDTHS.  Only a resize drag changes them, and a width never
drops below MIN_COLUMN_WIDTH.  The browser script in templates/index.html
performs the same arithmetic live; the widths it settles on come back as
``w_<column>`` query parameters.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from dashboard.sorting import SORT_ASC, SORT_DESC
from dashboard.view_state import SortState

# (column id, header label), in display order.
COLUMNS: tuple[tuple[str, str], ...] = (
    ("goals", "Goals"),
    ("tasks", "Tasks"),
    ("team", "Team"),
    ("priority", "Priority"),
    ("owner", "Owner"),
    ("status", "Status"),
    ("eta", "ETA"),
    ("completionDate", "Completion Date"),
    ("links", "Links"),
    ("notes", "Notes"),
)

DEFAULT_COLUMN_WIDTHS: dict[str, int] = {
    "goals": 200,
    "tasks": 180,
    "team": 140,
    "priority": 100,
    "owner": 140,
    "status": 120,
    "eta": 110,
    "completionDate": 140,
    "links": 100,
    "notes": 250,
}

MIN_COLUMN_WIDTH = 80

NEUTRAL_INDICATOR = "↕"
ASC_INDICATOR = "▲"
DESC_INDICATOR = "▼"

STATUS_BADGES: dict[str, str] = {
    "In Progress": "badge-blue",
    "To be picked": "badge-orange",
    "To be started": "badge-orange",
    "Ongoing": "badge-purple",
    "Completed": "badge-green",
}

PRIORITY_BADGES: dict[str, str] = {
    "P0": "badge-red",
    "P1": "badge-orange",
    "P2": "badge-yellow",
    "Critical": "badge-red",
    "High": "badge-orange",
    "Medium": "badge-yellow",
    "Low": "badge-muted",
}


def sort_indicator(column: str, sort: SortState) -> str:
    """Glyph for a header: arrow on the active column, neutral elsewhere."""
    if sort.column != column:
        return NEUTRAL_INDICATOR
    if sort.direction == SORT_ASC:
        return ASC_INDICATOR
    if sort.direction == SORT_DESC:
        return DESC_INDICATOR
    return NEUTRAL_INDICATOR


def external_href(value: str) -> str:
    """Return *value* if it is an http(s) URL, else "" (no link rendered)."""
    text = (value or "").strip()
    if text.lower().startswith(("http://", "https://")):
        return text
    return ""


def clamp_width(width: float) -> int:
    return max(MIN_COLUMN_WIDTH, int(round(width)))


class ColumnWidths:
    """Mutable column -> pixel width map."""

    def __init__(self, widths: Mapping[str, int] | None = None) -> None:
        self._widths: dict[str, int] = dict(DEFAULT_COLUMN_WIDTHS)
        if widths:
            for column, width in widths.items():
                self.set(column, width)

    def __getitem__(self, column: str) -> int:
        return self._widths[column]

    def __contains__(self, column: object) -> bool:
        return column in self._widths

    def set(self, column: str, width: float) -> int:
        """Set *column* to *width* (clamped); unknown columns raise KeyError."""
        if column not in self._widths:
            raise KeyError(column)
        self._widths[column] = clamp_width(width)
        return self._widths[column]

    def as_dict(self) -> dict[str, int]:
        return dict(self._widths)

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> ColumnWidths:
        """Read ``w_<column>`` params; bad or missing values keep the default."""
        widths = cls()
        for column in DEFAULT_COLUMN_WIDTHS:
            raw = params.get(f"w_{column}")
            if raw is None:
                continue
            try:
                widths.set(column, float(raw))
            except (ValueError, OverflowError):
                continue
        return widths

    def to_query_params(self) -> dict[str, str]:
        """Return only the widths that differ from the defaults."""
        return {
            f"w_{column}": str(width)
            for column, width in self._widths.items()
            if width != DEFAULT_COLUMN_WIDTHS[column]
        }


@dataclass
class _Drag:
    column: str
    start_x: float
    start_width: int


class ResizeDrag:
    """Pointer-down to pointer-up resize gesture over a ColumnWidths map.

    Only one column resizes at a time; starting a drag while another is
    active replaces it.  Moves without an active drag are ignored.
    """

    def __init__(self, widths: ColumnWidths) -> None:
        self.widths = widths
        self._drag: _Drag | None = None

    @property
    def active_column(self) -> str | None:
        return self._drag.column if self._drag else None

    def start(self, column: str, pointer_x: float) -> None:
        self._drag = _Drag(column, pointer_x, self.widths[column])

    def move(self, pointer_x: float) -> int | None:
        """Resize the active column to start width + displacement (min 80)."""
        if self._drag is None:
            return None
        diff = pointer_x - self._drag.start_x
        return self.widths.set(self._drag.column, self._drag.start_width + diff)

    def end(self) -> None:
        self._drag = None
