"""Google Sheets data pipeline for the program tracker.

Fetches the published CSV export of the Programs tab, parses it into
ProgramRecord values, and derives the filter facets shown on the dashboard.
"""

from sheets.models import ProgramRecord, FilterOptions, PROGRAM_FIELDS
from sheets.parser import parse_programs_csv
from sheets.facets import extract_filter_options
from sheets.service import DataFetchError, ProgramsService

__all__ = [
    "ProgramRecord",
    "FilterOptions",
    "PROGRAM_FIELDS",
    "parse_programs_csv",
    "extract_filter_options",
    "DataFetchError",
    "ProgramsService",
]
