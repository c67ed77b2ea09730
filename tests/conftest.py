"""
Pytest fixtures for the program tracker tests.

Provides a sample Programs CSV, fake HTTP sessions that never touch the
network, ProgramsService instances wired to them, and a TestClient factory
for the FastAPI app.
"""

import sys
from pathlib import Path

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient  # noqa: E402

from api.app import create_app  # noqa: E402
from sheets.models import ProgramRecord  # noqa: E402
from sheets.service import ProgramsService  # noqa: E402
from utils.config import AppConfig  # noqa: E402


SAMPLE_CSV = (
    "Goals,Tasks,Team,Priority,Owner,Status,ETA,Completion Date,Links,Notes\n"
    "Launch billing v2,Migrate invoices,Payments,P1,Ana,In Progress,2025-03-01,,https://example.com/billing,\n"
    "Reduce on-call load,Tune alerts,Platform,P0,Ben,Completed,2025-01-15,2025-01-20,,\"Done, see runbook\"\n"
    ",orphan task without a goal,Platform,P2,Ben,Ongoing,,,,\n"
    "Onboarding revamp,Write docs,Growth,P2,Cleo,To be picked,,,,\n"
    "Search relevance,Label data,Platform,Stretch,ana,Ongoing,2025-02-10,,,\n"
)


# ── Fake HTTP layer ───────────────────────────────────────────────────────────

class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200,
                 reason: str = "OK", json_data=None):
        self.text = text
        self.status_code = status_code
        self.reason = reason
        self._json = json_data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        return self._json


class FakeSession:
    """Records calls and replays a fixed response (or raises an error)."""

    def __init__(self, response: FakeResponse | None = None,
                 error: Exception | None = None, responses: dict | None = None):
        self.response = response
        self.error = error
        self.responses = responses or {}
        self.calls: list[dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        key = (params or {}).get("action")
        if key in self.responses:
            return self.responses[key]
        return self.response

    def close(self):
        pass


class FakeSessionManager:
    def __init__(self, session: FakeSession):
        self.session = session
        self.closed = False

    def close(self):
        self.closed = True


def make_service(csv_text: str = SAMPLE_CSV, status_code: int = 200,
                 error: Exception | None = None) -> ProgramsService:
    session = FakeSession(FakeResponse(csv_text, status_code,
                                       "OK" if status_code < 400 else "Error"),
                          error=error)
    return ProgramsService(csv_url="https://sheets.test/export?format=csv",
                           session_manager=FakeSessionManager(session))


def make_program(**fields) -> ProgramRecord:
    fields.setdefault("id", "program-0")
    return ProgramRecord(**fields)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def service() -> ProgramsService:
    return make_service()


@pytest.fixture()
def failing_service() -> ProgramsService:
    return make_service(error=requests.ConnectionError("network down"))


@pytest.fixture()
def app_config(monkeypatch) -> AppConfig:
    for var in ("SHEET_CSV_URL", "SHEET_FETCH_TIMEOUT", "SHEET_MAX_RETRIES",
                "APP_PORT", "APP_HOST", "APP_LOG_FORMAT", "APP_CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    return AppConfig.from_env()


@pytest.fixture()
def make_client(app_config):
    """Return a factory building a TestClient around a given service."""
    def _make(svc: ProgramsService) -> TestClient:
        return TestClient(create_app(service=svc, config=app_config))
    return _make


@pytest.fixture()
def client(make_client, service) -> TestClient:
    return make_client(service)
