"""Shared utilities for the program tracker."""

# Configuration
from utils.config import AppConfig, DEFAULT_CSV_URL

# HTTP sessions
from utils.http import RetryStrategy, SessionManager

# Date handling
from utils.formatting import date_timestamp, format_date, parse_sheet_date

__all__ = [
    "AppConfig",
    "DEFAULT_CSV_URL",
    "RetryStrategy",
    "SessionManager",
    "date_timestamp",
    "format_date",
    "parse_sheet_date",
]
