"""
Programs data service: the only component that talks to Google Sheets.

``get_programs_data`` is all-or-nothing and raises DataFetchError on any
fetch or parse failure.  ``get_filter_options`` swallows that error and
returns empty facets instead; callers of the two methods therefore see
different failure behaviour, and the HTTP layer only ever reports errors for
the record list.
"""

import csv
import logging

import requests

from sheets.facets import extract_filter_options
from sheets.models import FilterOptions, ProgramRecord
from sheets.parser import parse_programs_csv
from utils.config import DEFAULT_CSV_URL
from utils.http import SessionManager

logger = logging.getLogger(__name__)


class DataFetchError(Exception):
    """The sheet could not be fetched or parsed."""


class ProgramsService:
    """Fetches and parses the Programs sheet on every call (no caching).

    Args:
        csv_url: Published CSV export URL.
        session_manager: Pooled HTTP session provider; a default one with no
            retries is created when omitted.
        timeout: Request timeout in seconds, or None for no timeout.
    """

    def __init__(self, csv_url: str = DEFAULT_CSV_URL,
                 session_manager: SessionManager | None = None,
                 timeout: float | None = None) -> None:
        self.csv_url = csv_url
        self.session_manager = session_manager or SessionManager()
        self.timeout = timeout

    def _fetch_csv(self) -> str:
        resp = self.session_manager.session.get(self.csv_url, timeout=self.timeout)
        if not resp.ok:
            raise DataFetchError(
                f"Failed to fetch CSV: {resp.status_code} {resp.reason}"
            )
        return resp.text

    def get_programs_data(self) -> list[ProgramRecord]:
        """Return every program row in the sheet.

        Raises:
            DataFetchError: On network error, non-2xx response, or CSV that
                cannot be tokenized.
        """
        try:
            csv_text = self._fetch_csv()
            return parse_programs_csv(csv_text)
        except (requests.RequestException, csv.Error, DataFetchError) as exc:
            logger.error("Error fetching data from Google Sheets: %s", exc)
            raise DataFetchError(
                "Failed to fetch programs data from Google Sheets"
            ) from exc

    def get_filter_options(self) -> FilterOptions:
        """Return filter facets, or four empty lists if the fetch fails."""
        try:
            programs = self.get_programs_data()
        except DataFetchError as exc:
            logger.error("Error getting filter options: %s", exc)
            return FilterOptions.empty()
        return extract_filter_options(programs)

    def close(self) -> None:
        self.session_manager.close()
