"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "tubelink",
    "environment": "dev",
    "http": {
        "user_agent": DEFAULT_USER_AGENT,
    },
    "extraction": {
        "language": "en",
        "country": "US",
    },
    "resolve": {
        "default_quality": "highest",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
