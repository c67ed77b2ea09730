"""Configuration management utilities for the program tracker.

Provides:
- AppConfig, populated from environment variables
- The fixed published Google Sheets CSV location
"""

import os as _os
from typing import Optional


# ── Upstream sheet ────────────────────────────────────────────────────────────
# Column order of this tab is a positional contract (see sheets/parser.py).

SHEET_ID = "1u5QU1aI2pDJgc5koh8cLoHpYPDwLSuwe0uun9uhPcRM"
PROGRAMS_TAB_GID = "1272770503"
DEFAULT_CSV_URL = (
    f"https://docs.google.com/spreadsheets/d/{SHEET_ID}"
    f"/export?format=csv&gid={PROGRAMS_TAB_GID}"
)


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


class AppConfig:
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        SHEET_CSV_URL: Published CSV export to read (default: the Programs tab)
        SHEET_FETCH_TIMEOUT: Seconds before the sheet fetch gives up (default: none)
        SHEET_MAX_RETRIES: Retries on 429/5xx from the sheet host (default: 0)
        APP_PORT: Server port (default: 8000)
        APP_HOST: Server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    """

    def __init__(self) -> None:
        self.sheet_csv_url = _os.getenv("SHEET_CSV_URL", DEFAULT_CSV_URL)
        self.fetch_timeout = _optional_float(_os.getenv("SHEET_FETCH_TIMEOUT"))
        self.max_retries = int(_os.getenv("SHEET_MAX_RETRIES", "0"))
        self.api_port = int(_os.getenv("APP_PORT", "8000"))
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
