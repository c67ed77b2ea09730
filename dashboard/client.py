"""
Client-side data holder for the dashboard.

ProgramsHook owns the fetched records, the filter facets, and the
loading/error flags.  ``load()`` runs the record fetch and the facet fetch
concurrently and clears ``loading`` once both have finished, whatever their
outcome.  A failed record fetch sets ``error``; a failed facet fetch is only
logged and the previous facets stay.  ``refresh()`` re-runs the record fetch
alone.  Nothing is cancelled or de-duplicated; the last fetch to finish wins.

Two sources are provided:
    HttpProgramsSource     — calls GET /api/programs over HTTP (requests)
    ServiceProgramsSource  — calls a ProgramsService in-process
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from sheets.models import FilterOptions, ProgramRecord
from sheets.service import ProgramsService
from utils.http import SessionManager

logger = logging.getLogger(__name__)


class ProgramsClientError(Exception):
    """The programs endpoint returned a non-2xx response."""


class ProgramsSource(Protocol):
    def fetch_programs(self) -> list[ProgramRecord]: ...

    def fetch_filter_options(self) -> FilterOptions: ...


class HttpProgramsSource:
    """Reads programs and facets from a running ``/api/programs`` endpoint."""

    def __init__(self, base_url: str,
                 session_manager: SessionManager | None = None,
                 timeout: float | None = None) -> None:
        self.endpoint = base_url.rstrip("/") + "/api/programs"
        self.session_manager = session_manager or SessionManager()
        self.timeout = timeout

    def fetch_programs(self) -> list[ProgramRecord]:
        resp = self.session_manager.session.get(self.endpoint, timeout=self.timeout)
        if not resp.ok:
            raise ProgramsClientError("Failed to fetch programs")
        return [ProgramRecord.from_dict(item) for item in resp.json()]

    def fetch_filter_options(self) -> FilterOptions:
        resp = self.session_manager.session.get(
            self.endpoint,
            params={"action": "filter-options"},
            timeout=self.timeout,
        )
        if not resp.ok:
            raise ProgramsClientError("Failed to fetch filter options")
        return FilterOptions.from_dict(resp.json())


class ServiceProgramsSource:
    """Adapts a ProgramsService to the ProgramsSource interface."""

    def __init__(self, service: ProgramsService) -> None:
        self.service = service

    def fetch_programs(self) -> list[ProgramRecord]:
        return self.service.get_programs_data()

    def fetch_filter_options(self) -> FilterOptions:
        return self.service.get_filter_options()


class ProgramsHook:
    """Loading/error state around a ProgramsSource."""

    def __init__(self, source: ProgramsSource) -> None:
        self.source = source
        self.programs: list[ProgramRecord] = []
        self.filter_options: FilterOptions = FilterOptions.empty()
        self.loading: bool = True
        self.error: str | None = None

    def _fetch_programs(self) -> None:
        try:
            self.error = None
            self.programs = self.source.fetch_programs()
        except Exception as exc:
            self.error = str(exc) or "An error occurred"
            logger.error("Error fetching programs: %s", exc)

    def _fetch_filter_options(self) -> None:
        try:
            self.filter_options = self.source.fetch_filter_options()
        except Exception as exc:
            logger.error("Error fetching filter options: %s", exc)

    def load(self) -> None:
        """Initial load: records and facets concurrently."""
        self.loading = True
        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                futures = [
                    pool.submit(self._fetch_programs),
                    pool.submit(self._fetch_filter_options),
                ]
                for future in futures:
                    future.result()
        finally:
            self.loading = False

    def refresh(self) -> None:
        """Re-fetch the record list only (facets are left alone)."""
        self.loading = True
        try:
            self._fetch_programs()
        finally:
            self.loading = False
