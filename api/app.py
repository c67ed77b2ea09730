"""
FastAPI application factory for the program tracker.

Usage:
    python -m api.app                              # Dev server on port 8000
    SHEET_CSV_URL=https://... python -m api.app    # Read a different sheet tab

OpenAPI docs available at http://localhost:8000/docs after starting.

The app is built by create_app(); there is no module-level instance.  The
ProgramsService it serves from is passed in (or built from AppConfig) and
stored on ``app.state`` for the route dependencies.

Logging: plain text by default, newline-delimited JSON when
APP_LOG_FORMAT=json.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from api.routes import frontend as frontend_routes
from api.routes import programs
from dashboard.table import PRIORITY_BADGES, STATUS_BADGES, external_href
from sheets.service import ProgramsService
from utils.config import AppConfig
from utils.formatting import format_date
from utils.http import RetryStrategy, SessionManager

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured logging ───────────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("program_tracker_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)


def build_service(cfg: AppConfig) -> ProgramsService:
    """ProgramsService wired from configuration."""
    session_manager = SessionManager(
        retry_strategy=RetryStrategy(max_retries=cfg.max_retries)
    )
    return ProgramsService(
        csv_url=cfg.sheet_csv_url,
        session_manager=session_manager,
        timeout=cfg.fetch_timeout,
    )


def create_app(
    service: ProgramsService | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        service: ProgramsService to serve from (tests pass a stub).  Built
            from *config* when omitted.
        config: Override the environment-derived configuration.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg
    programs_service = service if service is not None else build_service(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _logger.info("Serving programs from %s", programs_service.csv_url)
        yield
        programs_service.close()

    app = FastAPI(
        title="Program Tracker API",
        summary="Read-only access to the program tracking sheet.",
        description=(
            "## Program Tracker\n\n"
            "Serves the rows of a published Google Sheets tab as typed program "
            "records, plus the distinct teams, priorities, owners and statuses "
            "used to populate the dashboard filters.\n\n"
            "Every request re-reads the sheet; record ids (`program-<n>`) are "
            "positional and only stable within one response."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "programs",
                "description": "Program records and filter options.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )
    app.state.programs_service = programs_service
    app.state.config = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request and tag the response with a request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, request.url.path, response.status_code,
                duration_ms, request_id,
            )
        return response

    # ── Security headers ──────────────────────────────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # 'unsafe-inline' covers the resize script embedded in index.html.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "status_code": 500},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API is running (the sheet is not contacted)."""
        return {"status": "ok"}

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(programs.router, prefix="/api")

    # ── Static files + Jinja2 templates ───────────────────────────────────────
    _here = Path(__file__).parent.parent  # project root

    static_dir = _here / "static"
    templates_dir = _here / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    if templates_dir.exists():
        templates = Jinja2Templates(directory=str(templates_dir))
        templates.env.filters["format_date"] = format_date
        templates.env.filters["external_href"] = external_href
        templates.env.filters["status_badge"] = lambda s: STATUS_BADGES.get(s, "")
        templates.env.filters["priority_badge"] = lambda p: PRIORITY_BADGES.get(p, "")

        frontend_routes.set_templates(templates)
        app.include_router(frontend_routes.router)

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
