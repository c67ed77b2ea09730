"""
End-to-end frontend route tests (tests/test_frontend_routes.py)

Tests for the Jinja2 dashboard served by api/routes/frontend.py:
    GET /    — summary cards, filter bar, programs table

All tests use FastAPI TestClient with stub services from conftest.py.
"""
import pytest

from conftest import make_service


def _row_order(html: str, goals: list[str]) -> list[str]:
    return sorted(goals, key=html.index)


class TestDashboardPage:
    def test_renders_all_programs(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        for goal in ("Launch billing v2", "Reduce on-call load",
                     "Onboarding revamp", "Search relevance"):
            assert goal in resp.text
        assert "orphan task without a goal" not in resp.text

    def test_filter_dropdowns_populated(self, client):
        html = client.get("/").text
        assert "All Status" in html
        assert '<option value="Payments"' in html
        assert '<option value="Stretch"' in html

    def test_links_open_in_new_tab(self, client):
        html = client.get("/").text
        assert 'href="https://example.com/billing"' in html
        assert 'rel="noopener noreferrer"' in html

    def test_dates_formatted(self, client):
        html = client.get("/").text
        assert "Mar 1, 2025" in html
        assert "Jan 20, 2025" in html

    def test_static_css_served(self, client):
        resp = client.get("/static/dashboard.css")
        assert resp.status_code == 200

    def test_security_headers(self, client):
        resp = client.get("/")
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert "X-Request-ID" in resp.headers


class TestFiltering:
    def test_status_filter(self, client):
        html = client.get("/", params={"status": "Completed"}).text
        assert "Reduce on-call load" in html
        assert "Launch billing v2" not in html

    def test_search_matches_owner_case_insensitive(self, client):
        html = client.get("/", params={"q": "CLEO"}).text
        assert "Onboarding revamp" in html
        assert "Launch billing v2" not in html

    def test_summary_counts_ignore_filters(self, client):
        html = client.get("/", params={"status": "In Progress"}).text
        # Completed card still counts the Completed row that is filtered out.
        assert "Reduce on-call load" not in html
        completed_card = html[html.index(">Completed</span>"):]
        assert '<span class="card-value">1</span>' in completed_card[:120]

    def test_clear_link_only_when_filtered(self, client):
        assert ">Clear</a>" not in client.get("/").text
        assert ">Clear</a>" in client.get("/", params={"team": "Growth"}).text


class TestSorting:
    def test_toggle_priority_sorts_ascending(self, client):
        html = client.get("/", params={"toggle": "priority"}).text
        assert _row_order(html, ["Launch billing v2", "Reduce on-call load",
                                 "Onboarding revamp", "Search relevance"]) == [
            "Reduce on-call load", "Launch billing v2",
            "Onboarding revamp", "Search relevance",
        ]
        assert "▲" in html

    def test_descending_from_query(self, client):
        html = client.get("/", params={"sort": "goals", "dir": "desc"}).text
        assert _row_order(html, ["Launch billing v2", "Search relevance"]) == [
            "Search relevance", "Launch billing v2",
        ]
        assert "▼" in html

    def test_header_link_cycles_to_next_state(self, client):
        html = client.get("/", params={"sort": "goals", "dir": "desc"}).text
        # Clicking goals again clears the sort, so its link carries no sort params.
        assert 'href="/"' in html


class TestColumnWidths:
    def test_default_width(self, client):
        assert 'data-column="goals" style="width: 200px"' in client.get("/").text

    def test_width_from_query(self, client):
        html = client.get("/", params={"w_goals": "250"}).text
        assert 'data-column="goals" style="width: 250px"' in html

    @pytest.mark.parametrize("raw", ["10", "-500"])
    def test_width_clamped(self, client, raw):
        html = client.get("/", params={"w_goals": raw}).text
        assert 'data-column="goals" style="width: 80px"' in html


class TestErrorState:
    def test_error_banner_with_retry(self, make_client, failing_service):
        resp = make_client(failing_service).get("/")
        assert resp.status_code == 200
        assert "Error loading data" in resp.text
        assert "Failed to fetch programs data from Google Sheets" in resp.text
        assert "Retry" in resp.text

    def test_empty_sheet_renders_zero_total(self, make_client):
        html = make_client(make_service(csv_text="Goals\n")).get("/").text
        assert "Error loading data" not in html
        assert '<span class="card-value">0</span>' in html


class TestLinks:
    def test_non_web_link_not_rendered_as_anchor(self, make_client):
        csv_text = (
            "Goals,Tasks,Team,Priority,Owner,Status,ETA,Completion Date,Links,Notes\n"
            "Risky row,t,Ops,P1,Ana,Ongoing,,,javascript:alert(1),\n"
        )
        html = make_client(make_service(csv_text=csv_text)).get("/").text
        assert "Risky row" in html
        assert 'href="javascript:' not in html
        assert "javascript:alert(1)" in html
