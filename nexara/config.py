"""Centralised settings for nexara.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the current working
directory (loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from dotenv import load_dotenv

load_dotenv(override=False)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NEXARA_TIMEOUT", "10.0"))
    )
    verify_ssl: bool = field(
        default_factory=lambda: _env_bool("NEXARA_VERIFY_SSL", "true")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "NEXARA_USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36",
        )
    )
    accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    accept_language: str = "en-US,en;q=0.5"

    # ------------------------------------------------------------------
    # Retry loop
    # ------------------------------------------------------------------
    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("NEXARA_MAX_RETRIES", "3"))
    )
    retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("NEXARA_RETRY_DELAY", "1.0"))
    )
    retry_client_errors: bool = field(
        default_factory=lambda: _env_bool("NEXARA_RETRY_CLIENT_ERRORS", "false")
    )

    # ------------------------------------------------------------------
    # Downloads & screenshots
    # ------------------------------------------------------------------
    download_chunk_size: int = field(
        default_factory=lambda: int(os.environ.get("NEXARA_CHUNK_SIZE", "65536"))
    )
    screenshot_endpoint: str = field(
        default_factory=lambda: os.environ.get(
            "NEXARA_SCREENSHOT_ENDPOINT", "https://image.thum.io/get"
        )
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("NEXARA_LOG_LEVEL", "WARNING")
    )

    @property
    def default_headers(self) -> dict[str, str]:
        """Browser-like request headers sent unless the caller replaces them."""
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
        }

    def client_options(self) -> dict[str, Any]:
        """Return the default ``httpx.Client`` keyword arguments."""
        return {
            "headers": self.default_headers,
            "timeout": self.request_timeout,
            "verify": self.verify_ssl,
            "follow_redirects": True,
        }


# Module-level singleton: import this everywhere:
#   from nexara.config import settings
settings = Settings()
