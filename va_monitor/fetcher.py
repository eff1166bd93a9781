"""
Fetch layer for the component declaration document.

Retrieves ``components.d.ts`` (and auxiliary repository files) over HTTP with
a per-attempt timeout and bounded retry. GitHub rate limiting is detected and
surfaced immediately since retrying cannot succeed before the limit resets.
"""

import os
import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Optional

import httpx

from va_monitor.config import (
    COMPONENT_LIBRARY_RAW_BASE,
    USER_AGENT,
    MonitorConfig,
    get_github_token,
)
from va_monitor.errors import ComponentMonitorError, ErrorCode

logger = logging.getLogger(__name__)

# Bodies shorter than this are redirects-to-HTML or truncated responses
MIN_DOCUMENT_LENGTH = 100
# Pause before each auxiliary file probe
PROBE_POLITENESS_DELAY_S = 0.5

SleepFn = Callable[[float], Awaitable[None]]


def build_headers(token: Optional[str]) -> Dict[str, str]:
    """Request headers: client identifier plus optional GitHub token."""
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/plain",
    }
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def format_reset_time(raw_reset: Optional[str]) -> str:
    """Convert an ``x-ratelimit-reset`` epoch header into an ISO timestamp."""
    if not raw_reset:
        return "unknown"
    try:
        return datetime.fromtimestamp(int(raw_reset), tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        return "unknown"


def rate_limit_message(reset_time: str, has_token: bool) -> str:
    """
    Build an actionable rate limit message.

    With a token there is nothing more to suggest than waiting. Without one the
    message explains how to supply a token; under the MCP server the
    instructions target the MCP client configuration instead of the shell.
    """
    if has_token:
        return f"GitHub API rate limit exceeded. Reset time: {reset_time}"

    header = (
        "VA Component Monitor - rate limit reached\n"
        f"GitHub allows 60 unauthenticated requests per hour. Reset time: {reset_time}\n"
    )
    if os.environ.get("MCP_SERVER_NAME") or os.environ.get("_MCP_SERVER_NAME"):
        return header + (
            "\nRaise the limit to 5,000 requests/hour with a GitHub token:\n"
            "  1. Create a token at https://github.com/settings/tokens (scope: public_repo)\n"
            "  2. Add it to the MCP server entry of your client config:\n"
            '       "env": { "GITHUB_TOKEN": "your_token_here" }\n'
            "  3. Restart the MCP client\n"
            "More info: https://docs.github.com/en/rest/overview/rate-limits"
        )
    return header + (
        "\nRaise the limit to 5,000 requests/hour with a GitHub token:\n"
        '  export GITHUB_TOKEN="your_token_here"\n'
        "or add GITHUB_TOKEN=your_token_here to a .env file.\n"
        "Get a token at https://github.com/settings/tokens (scope: public_repo)"
    )


def _check_rate_limit(response: httpx.Response, token: Optional[str]) -> None:
    """Raise RATE_LIMIT_EXCEEDED when GitHub signals an exhausted quota."""
    if response.status_code != 403:
        return
    remaining = response.headers.get("x-ratelimit-remaining")
    if remaining != "0":
        return
    reset_time = format_reset_time(response.headers.get("x-ratelimit-reset"))
    raise ComponentMonitorError(
        rate_limit_message(reset_time, bool(token)),
        ErrorCode.RATE_LIMIT_EXCEEDED,
        {
            "resetTime": reset_time,
            "hasToken": bool(token),
            "rateLimitRemaining": remaining,
        },
    )


class DocumentFetcher:
    """
    HTTP client wrapper for the component library repository.

    Example:
        >>> fetcher = DocumentFetcher(MonitorConfig())
        >>> content = await fetcher.fetch_document()
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: SleepFn = asyncio.sleep,
        token: Optional[str] = None,
        raw_base_url: str = COMPONENT_LIBRARY_RAW_BASE,
    ):
        """
        Initialize the fetcher.

        Args:
            config: Monitor configuration (timeouts, retries, URL)
            client: Shared httpx client; a short-lived one is created per call if None
            sleep: Coroutine used for retry and politeness delays
            token: GitHub token; read from the environment if None
            raw_base_url: Base URL for auxiliary repository file probes
        """
        self.config = config or MonitorConfig()
        self.client = client
        self.sleep = sleep
        self.token = token if token is not None else get_github_token()
        self.raw_base_url = raw_base_url.rstrip("/")

    async def _get(self, url: str) -> httpx.Response:
        """Single GET raced against the request timeout."""
        timeout_s = self.config.request_timeout_ms / 1000
        headers = build_headers(self.token)

        close_client = False
        client = self.client
        if client is None:
            client = httpx.AsyncClient(follow_redirects=True, timeout=timeout_s)
            close_client = True
        try:
            return await asyncio.wait_for(
                client.get(url, headers=headers, timeout=timeout_s),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ComponentMonitorError(
                "Request timeout",
                ErrorCode.TIMEOUT,
                {"timeoutMs": self.config.request_timeout_ms},
            ) from e
        finally:
            if close_client:
                await client.aclose()

    async def fetch_document(self, url: Optional[str] = None) -> str:
        """
        Fetch the declaration document, retrying transient failures.

        Args:
            url: Override for the configured definitions URL

        Returns:
            Raw document text

        Raises:
            ComponentMonitorError: RATE_LIMIT_EXCEEDED immediately; otherwise
                the last TIMEOUT / FETCH_ERROR / NETWORK_ERROR / INVALID_RESPONSE
                after all attempts are exhausted
        """
        url = url or self.config.definitions_url
        total_attempts = self.config.retry_attempts + 1
        last_error: Optional[ComponentMonitorError] = None

        if self.token:
            logger.info("Using GitHub authentication token")

        for attempt in range(total_attempts):
            logger.info(f"Fetching component definitions (attempt {attempt + 1}/{total_attempts})")
            try:
                response = await self._get(url)
                _check_rate_limit(response, self.token)

                if not response.is_success:
                    raise ComponentMonitorError(
                        "Failed to fetch component definitions",
                        ErrorCode.FETCH_ERROR,
                        {"status": response.status_code, "statusText": response.reason_phrase},
                    )

                content = response.text
                if not content or len(content) < MIN_DOCUMENT_LENGTH:
                    raise ComponentMonitorError(
                        "Received invalid or empty response",
                        ErrorCode.INVALID_RESPONSE,
                        {"length": len(content or "")},
                    )

                logger.info(f"Successfully fetched {len(content)} characters of component definitions")
                return content

            except ComponentMonitorError as e:
                if e.code == ErrorCode.RATE_LIMIT_EXCEEDED:
                    logger.error(f"Rate limit exceeded, not retrying (reset: {e.details['resetTime']})")
                    raise
                last_error = e
            except httpx.HTTPError as e:
                last_error = ComponentMonitorError(
                    "Network request failed",
                    ErrorCode.NETWORK_ERROR,
                    {"originalError": str(e)},
                )

            if attempt < total_attempts - 1:
                logger.warning(
                    f"Attempt {attempt + 1} failed, retrying in {self.config.retry_delay_ms}ms: {last_error.message}"
                )
                await self.sleep(self.config.retry_delay_ms / 1000)

        logger.error(f"All fetch attempts failed: {last_error.code.value}")
        raise last_error

    async def fetch_repository_file(self, file_path: str) -> Optional[str]:
        """
        Probe a file in the component library repository.

        Args:
            file_path: Path relative to the repository root

        Returns:
            File text, or None when the file does not exist or cannot be read

        Raises:
            ComponentMonitorError: RATE_LIMIT_EXCEEDED, or FETCH_ERROR for
                unexpected status codes
        """
        url = f"{self.raw_base_url}/{file_path.lstrip('/')}"
        logger.info(f"Checking for repository file: {file_path}")

        await self.sleep(PROBE_POLITENESS_DELAY_S)

        try:
            response = await self._get(url)
        except (ComponentMonitorError, httpx.HTTPError) as e:
            logger.info(f"File not readable: {file_path} - {e}")
            return None

        _check_rate_limit(response, self.token)

        if response.status_code == 404:
            return None

        if not response.is_success:
            raise ComponentMonitorError(
                f"Failed to fetch {file_path}: {response.status_code}",
                ErrorCode.FETCH_ERROR,
                {"status": response.status_code, "path": file_path},
            )

        return response.text


async def fetch_document(
    url: str,
    timeout_ms: int,
    max_retries: int,
    retry_delay_ms: int,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Convenience function to fetch a declaration document once.

    Args:
        url: Document URL (http/https)
        timeout_ms: Per-attempt timeout in milliseconds
        max_retries: Retries after the first attempt
        retry_delay_ms: Delay between attempts in milliseconds
        client: Optional shared httpx client

    Returns:
        Raw document text
    """
    config = MonitorConfig(
        definitions_url=url,
        request_timeout_ms=timeout_ms,
        retry_attempts=max_retries,
        retry_delay_ms=retry_delay_ms,
    )
    return await DocumentFetcher(config, client=client).fetch_document()
