"""Dashboard state, derivation and table behaviour for the program tracker."""

from dashboard.client import (
    HttpProgramsSource,
    ProgramsClientError,
    ProgramsHook,
    ServiceProgramsSource,
)
from dashboard.sorting import COLUMN_SORT_KEYS, sort_programs
from dashboard.table import ColumnWidths, ResizeDrag, sort_indicator
from dashboard.view_state import (
    DashboardStats,
    SortState,
    ViewState,
    compute_stats,
    derive_view,
    filter_programs,
)

__all__ = [
    "HttpProgramsSource",
    "ProgramsClientError",
    "ProgramsHook",
    "ServiceProgramsSource",
    "COLUMN_SORT_KEYS",
    "sort_programs",
    "ColumnWidths",
    "ResizeDrag",
    "sort_indicator",
    "DashboardStats",
    "SortState",
    "ViewState",
    "compute_stats",
    "derive_view",
    "filter_programs",
]
