"""Tests for the MCP server tool handlers."""

import asyncio

import pytest

from conftest import build_monitor, definitions_handler
from va_monitor.mcp_server import ComponentMonitorServer, GetComponentsByStatusArgs


@pytest.fixture
def server(clock):
    return ComponentMonitorServer(build_monitor(definitions_handler(), clock=clock))


def call(server, name, arguments=None):
    return asyncio.run(server.handle_tool(name, arguments or {}))


def test_get_component_status(server):
    result = call(server, "get_component_status", {"component": "va-button"})

    assert result["success"] is True
    assert result["name"] == "Button"
    assert result["tagName"] == "va-button"
    assert result["status"] == "STABLE"
    assert result["translations"] == ["English", "Spanish"]
    assert "properties" not in result


def test_get_component_status_not_found(server):
    result = call(server, "get_component_status", {"component": "va-ghost"})

    assert result["found"] is False
    assert "va-ghost" in result["message"]


def test_list_tools_share_cached_table(server):
    recommended = call(server, "list_recommended_components")
    caution = call(server, "list_caution_components")

    assert recommended["count"] == 1
    assert recommended["components"][0]["tagName"] == "va-alert"
    assert caution["count"] == 3


def test_get_components_by_status(server):
    result = call(server, "get_components_by_status", {"status": "EXPERIMENTAL"})

    assert result["status"] == "EXPERIMENTAL"
    assert [c["name"] for c in result["components"]] == ["Radio button"]


def test_invalid_arguments_are_reported(server):
    result = call(server, "get_components_by_status", {"status": "SHINY"})

    assert result["success"] is False
    assert result["code"] == "INVALID_INPUT"


def test_lint_components(server):
    result = call(server, "lint_components", {"componentNames": ["va-ghost", "va-button"]})

    assert result["hasErrors"] is True
    assert result["issues"][0]["type"] == "NOT_FOUND"
    assert result["summary"]["notFound"] == 1


def test_validate_components_in_code(server):
    result = call(server, "validate_components_in_code", {"components": ["va-alert"]})

    assert result["validation"][0]["component"]["status"] == "RECOMMENDED"


def test_monitor_errors_carry_code(server):
    result = call(server, "validate_components_in_code", {"components": []})

    assert result == {
        "success": False,
        "error": "componentNames array cannot be empty",
        "code": "INVALID_INPUT",
        "tool": "validate_components_in_code",
    }


def test_report_and_examples(server):
    report = call(server, "generate_component_report")
    examples = call(server, "get_component_examples", {"componentName": "va-radio"})
    props = call(server, "get_component_properties", {"componentName": "va-radio"})

    assert report["total"] == 5
    assert examples["examples"][0]["title"] == "Basic Usage"
    assert [p["name"] for p in props["properties"]] == ["label", "hint", "required", "error"]


def test_unknown_tool(server):
    result = call(server, "drop_tables")

    assert result["success"] is False
    assert result["code"] == "INVALID_INPUT"


def test_status_schema_lists_every_status():
    schema = GetComponentsByStatusArgs.model_json_schema()

    assert "USE_WITH_CAUTION" in str(schema)


def test_main_builds_server_from_arguments(monkeypatch, tmp_path):
    from va_monitor import mcp_server

    servers = []

    class RecordingServer(mcp_server.ComponentMonitorServer):
        def __init__(self, monitor=None):
            super().__init__(monitor)
            servers.append(self)

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VA_MONITOR_TIMEOUT", raising=False)
    # Registered so the value main() sets is removed afterwards
    monkeypatch.setenv("MCP_SERVER_NAME", "placeholder")
    monkeypatch.delenv("MCP_SERVER_NAME")
    monkeypatch.setattr(mcp_server, "ComponentMonitorServer", RecordingServer)
    monkeypatch.setattr(mcp_server.asyncio, "run", lambda coro: coro.close())
    monkeypatch.setattr("sys.argv", ["va-monitor-mcp", "--timeout", "20000", "--cache-timeout", "60000"])

    mcp_server.main()

    config = servers[0].monitor.config
    assert config.request_timeout_ms == 20000
    assert config.cache_timeout_ms == 60000
    assert mcp_server.os.environ["MCP_SERVER_NAME"] == "va-design-system-monitor"
