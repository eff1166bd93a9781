"""Tests for configuration and error types."""

import pytest

from va_monitor.config import (
    COMPONENT_DEFINITIONS_URL,
    DEFAULT_CACHE_TIMEOUT_MS,
    DEFAULT_TIMEOUT_MS,
    MonitorConfig,
    get_github_token,
)
from va_monitor.errors import ComponentMonitorError, ErrorCode, validate_input


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for var in ("VA_MONITOR_TIMEOUT", "VA_MONITOR_CACHE_TIMEOUT", "VA_MONITOR_RETRY_ATTEMPTS",
                "VA_MONITOR_RETRY_DELAY", "VA_MONITOR_DEFINITIONS_URL", "GITHUB_TOKEN", "GITHUB_API_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    # Keep any developer .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_defaults():
    config = MonitorConfig.from_options(None)

    assert config.definitions_url == COMPONENT_DEFINITIONS_URL
    assert config.request_timeout_ms == DEFAULT_TIMEOUT_MS
    assert config.cache_timeout_ms == DEFAULT_CACHE_TIMEOUT_MS
    assert config.retry_attempts == 2
    assert config.retry_delay_ms == 2000
    assert config.freshness_window_ms == DEFAULT_CACHE_TIMEOUT_MS


def test_options_must_be_a_mapping():
    with pytest.raises(ComponentMonitorError) as exc_info:
        MonitorConfig.from_options(["request_timeout_ms"])

    assert exc_info.value.code == ErrorCode.INVALID_OPTIONS


def test_unknown_options_are_ignored():
    config = MonitorConfig.from_options({"request_timeout_ms": 20000, "colour": "blue"})

    assert config.request_timeout_ms == 20000


@pytest.mark.parametrize("timeout", [999, 300_001, "fast", True])
def test_timeout_out_of_range(timeout):
    with pytest.raises(ComponentMonitorError) as exc_info:
        MonitorConfig(request_timeout_ms=timeout)

    assert exc_info.value.code == ErrorCode.INVALID_TIMEOUT


def test_timeout_bounds_are_inclusive():
    assert MonitorConfig(request_timeout_ms=1000).request_timeout_ms == 1000
    assert MonitorConfig(cache_timeout_ms=300_000).cache_timeout_ms == 300_000


@pytest.mark.parametrize("url", ["ftp://example.com/components.d.ts", "not a url", 12])
def test_invalid_url(url):
    with pytest.raises(ComponentMonitorError) as exc_info:
        MonitorConfig(definitions_url=url)

    assert exc_info.value.code == ErrorCode.INVALID_URL


def test_retry_settings_are_clamped():
    config = MonitorConfig(retry_attempts=9, retry_delay_ms=50)

    assert config.retry_attempts == 5
    assert config.retry_delay_ms == 1000
    assert MonitorConfig(retry_attempts=0).retry_attempts == 0
    assert MonitorConfig(retry_delay_ms=60_000).retry_delay_ms == 10_000


@pytest.mark.parametrize("options", [
    {"retry_attempts": "abc"},
    {"retry_delay_ms": "fast"},
    {"retry_attempts": [2]},
    {"retry_delay_ms": True},
])
def test_non_numeric_retry_options(options):
    with pytest.raises(ComponentMonitorError) as exc_info:
        MonitorConfig.from_options(options)

    assert exc_info.value.code == ErrorCode.INVALID_OPTIONS


def test_from_env(monkeypatch):
    monkeypatch.setenv("VA_MONITOR_TIMEOUT", "15000")
    monkeypatch.setenv("VA_MONITOR_RETRY_ATTEMPTS", "1")

    config = MonitorConfig.from_env()

    assert config.request_timeout_ms == 15000
    assert config.retry_attempts == 1


def test_from_env_ignores_bad_values(monkeypatch):
    monkeypatch.setenv("VA_MONITOR_TIMEOUT", "soon")
    monkeypatch.setenv("VA_MONITOR_CACHE_TIMEOUT", "5")

    config = MonitorConfig.from_env()

    assert config.request_timeout_ms == DEFAULT_TIMEOUT_MS
    assert config.cache_timeout_ms == DEFAULT_CACHE_TIMEOUT_MS


def test_overrides_beat_environment(monkeypatch):
    monkeypatch.setenv("VA_MONITOR_TIMEOUT", "15000")

    assert MonitorConfig.from_env(request_timeout_ms=20000).request_timeout_ms == 20000
    assert MonitorConfig.from_env(request_timeout_ms=None).request_timeout_ms == 15000


def test_from_env_reads_dotenv_file(tmp_path, monkeypatch):
    # Registers the variable with monkeypatch so the value load_dotenv sets is undone
    monkeypatch.setenv("VA_MONITOR_TIMEOUT", "placeholder")
    monkeypatch.delenv("VA_MONITOR_TIMEOUT")
    (tmp_path / ".env").write_text("VA_MONITOR_TIMEOUT=25000\n")

    assert MonitorConfig.from_env().request_timeout_ms == 25000


def test_github_token_precedence(monkeypatch):
    assert get_github_token() is None

    monkeypatch.setenv("GITHUB_API_TOKEN", "api")
    assert get_github_token() == "api"

    monkeypatch.setenv("GITHUB_TOKEN", "primary")
    assert get_github_token() == "primary"


# ============================================================================
# ERRORS
# ============================================================================

def test_error_to_dict():
    error = ComponentMonitorError("Request timeout", ErrorCode.TIMEOUT, {"timeoutMs": 10000})

    data = error.to_dict()

    assert data["error"] == "Request timeout"
    assert data["code"] == "TIMEOUT"
    assert data["details"] == {"timeoutMs": 10000}
    assert data["timestamp"].endswith("+00:00")


def test_error_defaults_to_unknown():
    assert ComponentMonitorError("oops").code == ErrorCode.UNKNOWN_ERROR


def test_validate_input_returns_value():
    assert validate_input("va-button", "name") == "va-button"


@pytest.mark.parametrize("value", [None, 3, "", "  ", "a<b", 'say "hi"'])
def test_validate_input_rejects(value):
    with pytest.raises(ComponentMonitorError) as exc_info:
        validate_input(value, "name")

    assert exc_info.value.code == ErrorCode.INVALID_INPUT
    assert "name" in exc_info.value.message
