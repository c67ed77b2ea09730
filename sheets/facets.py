"""Filter facet extraction: distinct non-empty values per categorical field."""

from collections.abc import Iterable

from sheets.models import FilterOptions, ProgramRecord


def _distinct_sorted(values: Iterable[str]) -> list[str]:
    return sorted({v for v in values if v})


def extract_filter_options(programs: list[ProgramRecord]) -> FilterOptions:
    """Return the sorted distinct teams, priorities, owners and statuses.

    Sorting is plain case-sensitive string order; empty values are dropped.
    """
    return FilterOptions(
        teams=_distinct_sorted(p.team for p in programs),
        priorities=_distinct_sorted(p.priority for p in programs),
        owners=_distinct_sorted(p.owner for p in programs),
        statuses=_distinct_sorted(p.status for p in programs),
    )
