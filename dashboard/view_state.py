"""
Dashboard view state and the derived (filtered, sorted, summarised) view.

ViewState is an immutable value object.  Every user interaction produces a
new state through one of its transition methods; the HTML frontend
round-trips it through the query string so nothing is kept server-side.

Filtering is a conjunction across the search box and the four facet
filters; the search box itself matches if any of goals, owner, team or
tasks contains the text (case-insensitive).  Summary counts always use the
unfiltered list.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from dashboard.sorting import SORT_ASC, SORT_DESC, SORT_NONE, sort_programs
from sheets.models import ProgramRecord

ALL = "all"

FILTER_FIELDS = ("status", "priority", "team", "owner")
SEARCH_FIELDS = ("goals", "owner", "team", "tasks")

STATUS_IN_PROGRESS = "In Progress"
STATUS_ONGOING = "Ongoing"
STATUS_TO_BE_PICKED = "To be picked"
STATUS_COMPLETED = "Completed"

# (card label, status filter value); None resets the status filter.
STATUS_CARDS: tuple[tuple[str, str | None], ...] = (
    ("Total", None),
    ("In Progress", STATUS_IN_PROGRESS),
    ("Ongoing", STATUS_ONGOING),
    ("To Pick", STATUS_TO_BE_PICKED),
    ("Completed", STATUS_COMPLETED),
)


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction; column is "" when cleared."""

    column: str = ""
    direction: str = SORT_NONE

    def toggle(self, column: str) -> SortState:
        """Apply a header click on *column*.

        A new column starts ascending; the active column cycles
        asc -> desc -> cleared -> asc.
        """
        if self.column != column:
            return SortState(column, SORT_ASC)
        if self.direction == SORT_ASC:
            return SortState(column, SORT_DESC)
        if self.direction == SORT_DESC:
            return SortState("", SORT_NONE)
        return SortState(column, SORT_ASC)


@dataclass(frozen=True)
class ViewState:
    search: str = ""
    status: str = ALL
    priority: str = ALL
    team: str = ALL
    owner: str = ALL
    sort: SortState = SortState()

    # ── Transitions ──────────────────────────────────────────────────────────

    def with_search(self, text: str) -> ViewState:
        return replace(self, search=text)

    def with_filter(self, name: str, value: str) -> ViewState:
        if name not in FILTER_FIELDS:
            raise ValueError(
                f"Unknown filter: '{name}'. Must be one of: {', '.join(FILTER_FIELDS)}"
            )
        return replace(self, **{name: value or ALL})

    def clear_filters(self) -> ViewState:
        """Reset search and all four filters; the sort is kept."""
        return ViewState(sort=self.sort)

    def toggle_sort(self, column: str) -> ViewState:
        return replace(self, sort=self.sort.toggle(column))

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search) or any(
            getattr(self, name) != ALL for name in FILTER_FIELDS
        )

    # ── Query-string round trip ──────────────────────────────────────────────

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> ViewState:
        """Rebuild a state from ``q``, the filter names, ``sort`` and ``dir``.

        An unrecognised direction or a direction without a column yields an
        unsorted state.
        """
        column = params.get("sort", "") or ""
        direction = params.get("dir", SORT_NONE) or SORT_NONE
        if direction not in (SORT_ASC, SORT_DESC) or not column:
            sort = SortState()
        else:
            sort = SortState(column, direction)
        state = cls(sort=sort).with_search(params.get("q", "") or "")
        for name in FILTER_FIELDS:
            state = state.with_filter(name, params.get(name) or ALL)
        return state

    def to_query_params(self) -> dict[str, str]:
        """Return only the non-default parts of the state."""
        out: dict[str, str] = {}
        if self.search:
            out["q"] = self.search
        for name in FILTER_FIELDS:
            value = getattr(self, name)
            if value != ALL:
                out[name] = value
        if self.sort.direction != SORT_NONE:
            out["sort"] = self.sort.column
            out["dir"] = self.sort.direction
        return out


# ── Filtering ─────────────────────────────────────────────────────────────────

def matches(program: ProgramRecord, state: ViewState) -> bool:
    if state.search:
        needle = state.search.lower()
        if not any(needle in program.get(f).lower() for f in SEARCH_FIELDS):
            return False
    for name in FILTER_FIELDS:
        wanted = getattr(state, name)
        if wanted != ALL and program.get(name) != wanted:
            return False
    return True


def filter_programs(
    programs: Sequence[ProgramRecord], state: ViewState
) -> list[ProgramRecord]:
    return [p for p in programs if matches(p, state)]


# ── Summary ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DashboardStats:
    total: int = 0
    in_progress: int = 0
    ongoing: int = 0
    to_be_picked: int = 0
    completed: int = 0

    def count_for(self, status: str | None) -> int:
        """Card value for a STATUS_CARDS entry (None means total)."""
        return {
            None: self.total,
            STATUS_IN_PROGRESS: self.in_progress,
            STATUS_ONGOING: self.ongoing,
            STATUS_TO_BE_PICKED: self.to_be_picked,
            STATUS_COMPLETED: self.completed,
        }.get(status, 0)


def compute_stats(programs: Sequence[ProgramRecord]) -> DashboardStats:
    def count(status: str) -> int:
        return sum(1 for p in programs if p.status == status)

    return DashboardStats(
        total=len(programs),
        in_progress=count(STATUS_IN_PROGRESS),
        ongoing=count(STATUS_ONGOING),
        to_be_picked=count(STATUS_TO_BE_PICKED),
        completed=count(STATUS_COMPLETED),
    )


@dataclass(frozen=True)
class DashboardView:
    programs: list[ProgramRecord]
    stats: DashboardStats


def derive_view(programs: Sequence[ProgramRecord], state: ViewState) -> DashboardView:
    """Filter, then sort, the fetched list; stats come from the full list."""
    visible = sort_programs(
        filter_programs(programs, state), state.sort.column, state.sort.direction
    )
    return DashboardView(programs=visible, stats=compute_stats(programs))
