"""
Configuration for the VA Design System monitor.

Options can be passed directly (library use) or loaded from the environment
and a ``.env`` file (CLI / MCP server use).
"""

import os
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from va_monitor.errors import ComponentMonitorError, ErrorCode

logger = logging.getLogger(__name__)


COMPONENT_DEFINITIONS_URL = (
    "https://raw.githubusercontent.com/department-of-veterans-affairs/component-library/"
    "refs/heads/main/packages/web-components/src/components.d.ts"
)
COMPONENT_LIBRARY_RAW_BASE = (
    "https://raw.githubusercontent.com/department-of-veterans-affairs/component-library/main"
)
USER_AGENT = "VA-Design-System-Monitor/2.1.0"

DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_CACHE_TIMEOUT_MS = 5 * 60 * 1000
MAX_CACHE_AGE_MS = 60 * 60 * 1000  # hard ceiling, also bounds stale fallback

MIN_TIMEOUT_MS = 1_000
MAX_TIMEOUT_MS = 300_000
DEFAULT_RETRY_ATTEMPTS = 2
MAX_RETRY_ATTEMPTS = 5
DEFAULT_RETRY_DELAY_MS = 2_000
MIN_RETRY_DELAY_MS = 1_000
MAX_RETRY_DELAY_MS = 10_000

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GITHUB_API_TOKEN")

ENV_OPTION_MAP = {
    "VA_MONITOR_TIMEOUT": "request_timeout_ms",
    "VA_MONITOR_CACHE_TIMEOUT": "cache_timeout_ms",
    "VA_MONITOR_RETRY_ATTEMPTS": "retry_attempts",
    "VA_MONITOR_RETRY_DELAY": "retry_delay_ms",
}


def get_github_token() -> Optional[str]:
    """Return the GitHub token from the environment, if any."""
    for var in TOKEN_ENV_VARS:
        token = os.environ.get(var)
        if token:
            return token
    return None


def _as_int(value: Any, name: str) -> int:
    """Coerce a numeric option, rejecting anything that is not a number."""
    if isinstance(value, bool):
        raise ComponentMonitorError(f"{name} must be a number", ErrorCode.INVALID_OPTIONS)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ComponentMonitorError(f"{name} must be a number", ErrorCode.INVALID_OPTIONS) from e


class MonitorConfig(BaseModel):
    """
    Validated monitor options.

    Timeouts must fall within [1000ms, 300000ms]; retry attempts and delay are
    clamped into their ranges rather than rejected.
    """
    model_config = ConfigDict(extra="forbid")

    definitions_url: str = Field(
        COMPONENT_DEFINITIONS_URL,
        description="URL of the components.d.ts declaration document",
    )
    request_timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, description="Per-attempt request timeout")
    cache_timeout_ms: int = Field(DEFAULT_CACHE_TIMEOUT_MS, description="Configured cache freshness")
    retry_attempts: int = Field(DEFAULT_RETRY_ATTEMPTS, description="Retries after the first attempt")
    retry_delay_ms: int = Field(DEFAULT_RETRY_DELAY_MS, description="Delay between attempts")

    @field_validator("definitions_url", mode="before")
    @classmethod
    def _check_url(cls, value: Any) -> str:
        if not value:
            return COMPONENT_DEFINITIONS_URL
        if not isinstance(value, str):
            raise ComponentMonitorError("Invalid URL provided", ErrorCode.INVALID_URL)
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ComponentMonitorError("URL must use HTTP or HTTPS protocol", ErrorCode.INVALID_URL)
        return value

    @field_validator("request_timeout_ms", "cache_timeout_ms", mode="before")
    @classmethod
    def _check_timeout(cls, value: Any, info: ValidationInfo) -> int:
        if value is None:
            return DEFAULT_TIMEOUT_MS if info.field_name == "request_timeout_ms" else DEFAULT_CACHE_TIMEOUT_MS
        if isinstance(value, bool) or not isinstance(value, (int, float)) \
                or value < MIN_TIMEOUT_MS or value > MAX_TIMEOUT_MS:
            raise ComponentMonitorError(
                f"Timeout must be between {MIN_TIMEOUT_MS}ms and {MAX_TIMEOUT_MS}ms",
                ErrorCode.INVALID_TIMEOUT,
            )
        return int(value)

    @field_validator("retry_attempts", mode="before")
    @classmethod
    def _clamp_retries(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_RETRY_ATTEMPTS
        return max(0, min(MAX_RETRY_ATTEMPTS, _as_int(value, "retry_attempts")))

    @field_validator("retry_delay_ms", mode="before")
    @classmethod
    def _clamp_delay(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_RETRY_DELAY_MS
        return max(MIN_RETRY_DELAY_MS, min(MAX_RETRY_DELAY_MS, _as_int(value, "retry_delay_ms")))

    @property
    def freshness_window_ms(self) -> int:
        """Cache freshness window, never longer than the hard ceiling."""
        return min(self.cache_timeout_ms, MAX_CACHE_AGE_MS)

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> "MonitorConfig":
        """
        Build a config from a plain options mapping.

        Args:
            options: Mapping of option names to values, or None for defaults

        Raises:
            ComponentMonitorError: INVALID_OPTIONS when options is not a mapping
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, dict):
            raise ComponentMonitorError("Options must be an object", ErrorCode.INVALID_OPTIONS)
        known = {k: v for k, v in options.items() if k in cls.model_fields}
        return cls(**known)

    @classmethod
    def from_env(cls, **overrides: Any) -> "MonitorConfig":
        """
        Build a config from environment variables (and a .env file if present).

        Numeric environment values that are malformed or out of range are
        ignored with a warning. Explicit overrides win over the environment.
        """
        load_dotenv(find_dotenv(usecwd=True))

        options: Dict[str, Any] = {}
        url = os.environ.get("VA_MONITOR_DEFINITIONS_URL")
        if url:
            options["definitions_url"] = url

        for env_var, field_name in ENV_OPTION_MAP.items():
            raw = os.environ.get(env_var)
            if not raw:
                continue
            try:
                value = int(raw)
            except ValueError:
                logger.warning(f"Ignoring non-numeric {env_var}={raw!r}")
                continue
            if field_name.endswith("timeout_ms") and not MIN_TIMEOUT_MS <= value <= MAX_TIMEOUT_MS:
                logger.warning(f"Ignoring out-of-range {env_var}={value}")
                continue
            options[field_name] = value

        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_options(options)
