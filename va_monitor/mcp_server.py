#!/usr/bin/env python3
"""
VA Design System Monitor MCP Server

Gives AI assistants access to the VA Design System component library:
component status, maturity, properties and usage examples.

Tools:
1. get_component_status - Status and maturity of one component
2. list_recommended_components - Components recommended for production
3. list_caution_components - Components to use with caution
4. get_components_by_status - Components with a given status
5. generate_component_report - Report over the whole library
6. validate_components_in_code - Check component names against the library
7. lint_components - Lint issues for a list of component names
8. get_component_properties - Properties of one component
9. get_component_examples - Usage examples for one component

Usage:
    # Start server (stdio mode)
    va-monitor-mcp

    # Or as a module
    python -m va_monitor.mcp_server --timeout 20000
"""

import os
import sys
import json
import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
from pydantic import BaseModel, Field, ValidationError

from va_monitor import __version__
from va_monitor.config import MonitorConfig
from va_monitor.errors import ComponentMonitorError, ErrorCode
from va_monitor.monitor import ComponentMonitor
from va_monitor.schemas import ComponentStatus

SERVER_NAME = "va-design-system-monitor"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.FileHandler('/tmp/va_monitor_mcp_server.log')]
)
logger = logging.getLogger(__name__)


# ============================================================================
# PYDANTIC MODELS FOR TOOL ARGUMENTS
# ============================================================================

class GetComponentStatusArgs(BaseModel):
    """Arguments for get_component_status tool."""
    component: str = Field(
        ...,
        description="Component name, tag name (e.g., va-button), or interface name (e.g., VaButton)"
    )


class NoArgs(BaseModel):
    """Arguments for tools that take none."""
    pass


class GetComponentsByStatusArgs(BaseModel):
    """Arguments for get_components_by_status tool."""
    status: ComponentStatus = Field(..., description="The component status to filter by")


class GenerateReportArgs(BaseModel):
    """Arguments for generate_component_report tool."""
    forceRefresh: bool = Field(False, description="Force refresh of component data from remote source")


class ValidateComponentsArgs(BaseModel):
    """Arguments for validate_components_in_code tool."""
    components: List[str] = Field(..., description="Array of component names to validate")


class LintComponentsArgs(BaseModel):
    """Arguments for lint_components tool."""
    componentNames: List[str] = Field(..., description="Array of component names to lint")


class ComponentNameArgs(BaseModel):
    """Arguments for tools operating on one component."""
    componentName: str = Field(..., description="The name of the component")


# ============================================================================
# MONITOR SERVER
# ============================================================================

class ComponentMonitorServer:
    """
    MCP Server exposing a ComponentMonitor.

    One monitor (and so one component cache) serves every tool call.
    """

    def __init__(self, monitor: Optional[ComponentMonitor] = None):
        """
        Initialize the server.

        Args:
            monitor: Monitor to serve (default: one configured from the environment)
        """
        self.monitor = monitor or ComponentMonitor(config=MonitorConfig.from_env())
        self.server = Server(SERVER_NAME)
        self._register_tools()
        logger.info(f"ComponentMonitorServer initialized (v{__version__})")

    def _register_tools(self):
        """Register all MCP tools."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return [
                Tool(
                    name="get_component_status",
                    description="Get the status and maturity information for a specific VA component",
                    inputSchema=GetComponentStatusArgs.model_json_schema()
                ),
                Tool(
                    name="list_recommended_components",
                    description=(
                        "List all VA components with best_practice maturity level "
                        "(recommended for production)"
                    ),
                    inputSchema=NoArgs.model_json_schema()
                ),
                Tool(
                    name="list_caution_components",
                    description=(
                        "List all VA components that should be used with caution "
                        "(experimental, candidate, or caution category)"
                    ),
                    inputSchema=NoArgs.model_json_schema()
                ),
                Tool(
                    name="get_components_by_status",
                    description="Get all components with a specific status",
                    inputSchema=GetComponentsByStatusArgs.model_json_schema()
                ),
                Tool(
                    name="generate_component_report",
                    description="Generate a comprehensive report of all VA components and their maturity status",
                    inputSchema=GenerateReportArgs.model_json_schema()
                ),
                Tool(
                    name="validate_components_in_code",
                    description="Validate a list of component names against current VA component library status",
                    inputSchema=ValidateComponentsArgs.model_json_schema()
                ),
                Tool(
                    name="lint_components",
                    description=(
                        "Lint a list of component names: reports missing components (errors) "
                        "and experimental, caution or issue-prone components (warnings/info)"
                    ),
                    inputSchema=LintComponentsArgs.model_json_schema()
                ),
                Tool(
                    name="get_component_properties",
                    description="Get the properties of a specific VA component",
                    inputSchema=ComponentNameArgs.model_json_schema()
                ),
                Tool(
                    name="get_component_examples",
                    description="Generate example implementations for a specific VA component",
                    inputSchema=ComponentNameArgs.model_json_schema()
                ),
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Any) -> List[TextContent]:
            """Route tool calls to appropriate handlers."""
            logger.info(f"Tool called: {name} with args: {arguments}")
            result = await self.handle_tool(name, arguments or {})
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

    async def handle_tool(self, name: str, arguments: Dict) -> Dict:
        """
        Dispatch one tool call.

        Errors are returned as ``{"success": False, ...}`` results, never raised.
        """
        handlers = {
            "get_component_status": self._handle_get_component_status,
            "list_recommended_components": self._handle_list_recommended,
            "list_caution_components": self._handle_list_caution,
            "get_components_by_status": self._handle_get_components_by_status,
            "generate_component_report": self._handle_generate_report,
            "validate_components_in_code": self._handle_validate_components,
            "lint_components": self._handle_lint_components,
            "get_component_properties": self._handle_get_component_properties,
            "get_component_examples": self._handle_get_component_examples,
        }

        try:
            handler = handlers.get(name)
            if handler is None:
                raise ComponentMonitorError(f"Unknown tool: {name}", ErrorCode.INVALID_INPUT)
            return await handler(arguments)

        except ComponentMonitorError as e:
            logger.error(f"Error in tool {name}: {e.code.value} {e.message}")
            return {"success": False, "error": e.message, "code": e.code.value, "tool": name}
        except ValidationError as e:
            logger.error(f"Invalid arguments for tool {name}: {e}")
            return {"success": False, "error": str(e), "code": ErrorCode.INVALID_INPUT.value, "tool": name}
        except Exception as e:
            logger.error(f"Error in tool {name}: {e}", exc_info=True)
            return {"success": False, "error": str(e), "code": ErrorCode.UNKNOWN_ERROR.value, "tool": name}

    # ========================================================================
    # TOOL HANDLERS
    # ========================================================================

    async def _handle_get_component_status(self, args: Dict) -> Dict:
        validated_args = GetComponentStatusArgs(**args)
        component = await self.monitor.get_component_by_name(validated_args.component)
        if component is None:
            return {
                "success": False,
                "found": False,
                "message": f'Component "{validated_args.component}" not found in VA Design System.',
            }

        return {
            "success": True,
            "found": True,
            **component.model_dump(
                by_alias=True,
                include={
                    "name", "tag_name", "status", "maturity_category", "maturity_level",
                    "recommendation", "guidance_href", "translations",
                },
            ),
        }

    async def _handle_list_recommended(self, args: Dict) -> Dict:
        recommended = await self.monitor.get_recommended_components()
        return {
            "success": True,
            "count": len(recommended),
            "components": [
                c.model_dump(by_alias=True, include={"name", "tag_name", "recommendation"})
                for c in recommended
            ],
        }

    async def _handle_list_caution(self, args: Dict) -> Dict:
        caution = await self.monitor.get_caution_components()
        return {
            "success": True,
            "count": len(caution),
            "components": [c.summary().model_dump(by_alias=True) for c in caution],
        }

    async def _handle_get_components_by_status(self, args: Dict) -> Dict:
        validated_args = GetComponentsByStatusArgs(**args)
        status = validated_args.status.value
        components = await self.monitor.get_components_by_status(status)
        return {
            "success": True,
            "status": status,
            "count": len(components),
            "components": [
                c.model_dump(by_alias=True, include={"name", "tag_name", "maturity_level", "recommendation"})
                for c in components
            ],
        }

    async def _handle_generate_report(self, args: Dict) -> Dict:
        validated_args = GenerateReportArgs(**args)
        report = await self.monitor.generate_report(force_refresh=validated_args.forceRefresh)
        return {"success": True, **report.model_dump(mode="json", by_alias=True)}

    async def _handle_validate_components(self, args: Dict) -> Dict:
        validated_args = ValidateComponentsArgs(**args)
        result = await self.monitor.validate_components(validated_args.components)
        return {"success": True, **result.model_dump(mode="json", by_alias=True)}

    async def _handle_lint_components(self, args: Dict) -> Dict:
        validated_args = LintComponentsArgs(**args)
        result = await self.monitor.lint_components(validated_args.componentNames)
        return {"success": True, **result.model_dump(mode="json", by_alias=True)}

    async def _handle_get_component_properties(self, args: Dict) -> Dict:
        validated_args = ComponentNameArgs(**args)
        result = await self.monitor.get_component_properties(validated_args.componentName)
        if result is None:
            return {"success": False, "found": False, "message": f'Component "{validated_args.componentName}" not found'}
        return {"success": True, **result.model_dump(mode="json", by_alias=True)}

    async def _handle_get_component_examples(self, args: Dict) -> Dict:
        validated_args = ComponentNameArgs(**args)
        result = await self.monitor.get_component_examples(validated_args.componentName)
        if result is None:
            return {"success": False, "found": False, "message": f'Component "{validated_args.componentName}" not found'}
        return {"success": True, **result.model_dump(mode="json", by_alias=True)}

    async def run(self):
        """Run the MCP server (stdio mode)."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("VA Design System Monitor MCP Server started")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def main():
    """Main entry point for the VA Design System Monitor MCP server."""
    import argparse

    parser = argparse.ArgumentParser(
        description="VA Design System Monitor MCP Server - component status for AI assistants"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Request timeout in milliseconds (default: 10000)"
    )
    parser.add_argument(
        "--cache-timeout",
        type=int,
        default=None,
        help="Cache freshness window in milliseconds (default: 300000)"
    )

    args = parser.parse_args()

    # Rate limit messages point MCP users at their server configuration
    os.environ.setdefault("MCP_SERVER_NAME", SERVER_NAME)

    try:
        config = MonitorConfig.from_env(
            request_timeout_ms=args.timeout,
            cache_timeout_ms=args.cache_timeout,
        )
        server = ComponentMonitorServer(ComponentMonitor(config=config))
        asyncio.run(server.run())
    except ComponentMonitorError as e:
        logger.error(f"Server failed: {e.code.value} {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
