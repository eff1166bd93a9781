"""
Error types for the VA Design System monitor.

Every failure raised by the engine is a ComponentMonitorError carrying a
stable machine-readable code. Adapters (CLI, MCP server) decide how a code is
presented to the user; the engine never prints or exits.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_OPTIONS = "INVALID_OPTIONS"
    INVALID_URL = "INVALID_URL"
    INVALID_TIMEOUT = "INVALID_TIMEOUT"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_DATA = "INVALID_DATA"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    FETCH_ERROR = "FETCH_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    NO_COMPONENTS_FOUND = "NO_COMPONENTS_FOUND"
    SEARCH_ERROR = "SEARCH_ERROR"
    FILTER_ERROR = "FILTER_ERROR"
    CHECK_ERROR = "CHECK_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    LINT_ERROR = "LINT_ERROR"
    PROPERTIES_ERROR = "PROPERTIES_ERROR"
    EXAMPLES_ERROR = "EXAMPLES_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ComponentMonitorError(Exception):
    """Error raised by monitor operations."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human readable description
            code: Stable error code
            details: Optional structured diagnostics (status codes, reset times, ...)
        """
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)
        self.details = details
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "error": self.message,
            "code": self.code.value,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return f"ComponentMonitorError({self.message!r}, code={self.code.value})"


# Characters rejected in any user supplied string
_FORBIDDEN_CHARACTERS = set("<>'\"")


def validate_input(value: Any, name: str) -> str:
    """
    Validate a required, non-empty string parameter.

    Args:
        value: Value to check
        name: Parameter name used in the error message

    Returns:
        The value unchanged

    Raises:
        ComponentMonitorError: INVALID_INPUT when missing, not a string, blank,
            or containing markup/quote characters
    """
    if value is None:
        raise ComponentMonitorError(f"Parameter '{name}' is required", ErrorCode.INVALID_INPUT)

    if not isinstance(value, str):
        raise ComponentMonitorError(f"Parameter '{name}' must be of type string", ErrorCode.INVALID_INPUT)

    if not value.strip():
        raise ComponentMonitorError(f"Parameter '{name}' cannot be empty", ErrorCode.INVALID_INPUT)

    if any(ch in _FORBIDDEN_CHARACTERS for ch in value):
        raise ComponentMonitorError(f"Parameter '{name}' contains invalid characters", ErrorCode.INVALID_INPUT)

    return value
