"""
Tests for api/app.py — create_app() factory

Verifies the FastAPI app is created with correct configuration,
routers are registered, and middleware is functional.
"""
import pytest
from fastapi.testclient import TestClient

from api.app import build_service, create_app
from sheets.service import ProgramsService

from conftest import make_service


@pytest.fixture()
def app(app_config, service):
    return create_app(service=service, config=app_config)


class TestCreateApp:
    def test_title_and_version(self, app):
        assert app.title == "Program Tracker API"
        assert app.version == "1.0.0"

    def test_routes_registered(self, app):
        paths = {getattr(r, "path", "") for r in app.routes}
        assert "/health" in paths
        assert "/static" in paths

    @pytest.mark.parametrize("path", ["/api/programs", "/", "/health"])
    def test_routes_respond(self, app, path):
        assert TestClient(app).get(path).status_code == 200

    def test_service_on_state(self, app, service, app_config):
        assert app.state.programs_service is service
        assert app.state.config is app_config

    def test_builds_service_from_config(self, app_config):
        app_config.sheet_csv_url = "https://sheets.test/alt.csv"
        app_config.fetch_timeout = 5.0
        app = create_app(config=app_config)
        built = app.state.programs_service
        assert isinstance(built, ProgramsService)
        assert built.csv_url == "https://sheets.test/alt.csv"
        assert built.timeout == 5.0

    def test_build_service_retries(self, app_config):
        app_config.max_retries = 2
        svc = build_service(app_config)
        assert svc.session_manager.retry_strategy.max_retries == 2

    def test_shutdown_closes_service(self, app_config):
        svc = make_service()
        with TestClient(create_app(service=svc, config=app_config)) as c:
            assert c.get("/health").status_code == 200
        assert svc.session_manager.closed is True


class TestMiddleware:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_health_does_not_touch_sheet(self, client, service):
        client.get("/health")
        assert service.session_manager.session.calls == []

    def test_request_id_header(self, client):
        resp = client.get("/health")
        assert len(resp.headers["X-Request-ID"]) == 8

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert "default-src 'self'" in resp.headers["Content-Security-Policy"]

    def test_cors_allows_any_origin_by_default(self, client):
        resp = client.get("/health", headers={"Origin": "http://elsewhere.test"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_restricted_origins(self, app_config, service):
        app_config.cors_origins = ["http://allowed.test"]
        c = TestClient(create_app(service=service, config=app_config))
        ok = c.get("/health", headers={"Origin": "http://allowed.test"})
        denied = c.get("/health", headers={"Origin": "http://other.test"})
        assert ok.headers["access-control-allow-origin"] == "http://allowed.test"
        assert "access-control-allow-origin" not in denied.headers

    def test_unknown_route_404(self, client):
        assert client.get("/api/nope").status_code == 404

    def test_request_logged(self, client, caplog):
        caplog.set_level("INFO", logger="program_tracker_api")
        client.get("/health")
        assert "path=/health" in caplog.text
