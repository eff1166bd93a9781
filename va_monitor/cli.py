"""
VA Design System Monitor CLI

Command-line access to VA Design System component status:
1. Check a component's status, properties and usage examples
2. Validate and lint lists of component names
3. List components by status and report on the whole library
"""

import sys
import json
import asyncio
import logging
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from va_monitor import __version__
from va_monitor.config import MonitorConfig
from va_monitor.errors import ComponentMonitorError, ErrorCode
from va_monitor.monitor import (
    ComponentMonitor,
    check_component,
    get_component_properties,
    get_official_examples,
    lint_components,
    validate_components,
)
from va_monitor.schemas import ComponentStatus

app = typer.Typer(
    name="va-components",
    help="Monitor VA Design System component status and maturity levels",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    ComponentStatus.RECOMMENDED.value: "🟢",
    ComponentStatus.STABLE.value: "🟡",
    ComponentStatus.EXPERIMENTAL.value: "🟠",
    ComponentStatus.AVAILABLE_WITH_ISSUES.value: "🔴",
    ComponentStatus.USE_WITH_CAUTION.value: "⚠️",
    ComponentStatus.UNKNOWN.value: "❓",
}

SEVERITY_ICONS = {"error": "❌", "warning": "⚠️", "info": "ℹ️"}

LIST_FILTERS = {
    "recommended": ComponentStatus.RECOMMENDED.value,
    "stable": ComponentStatus.STABLE.value,
    "experimental": ComponentStatus.EXPERIMENTAL.value,
    "issues": ComponentStatus.AVAILABLE_WITH_ISSUES.value,
}

EXIT_CODES = {
    ErrorCode.INVALID_INPUT: 1,
    ErrorCode.INVALID_OPTIONS: 1,
    ErrorCode.INVALID_URL: 1,
    ErrorCode.INVALID_TIMEOUT: 1,
    ErrorCode.INVALID_STATUS: 1,
    ErrorCode.NETWORK_ERROR: 3,
    ErrorCode.FETCH_ERROR: 3,
    ErrorCode.RATE_LIMIT_EXCEEDED: 3,
    ErrorCode.TIMEOUT: 4,
    ErrorCode.NO_COMPONENTS_FOUND: 5,
    ErrorCode.SEARCH_ERROR: 6,
    ErrorCode.FILTER_ERROR: 6,
    ErrorCode.VALIDATION_ERROR: 7,
    ErrorCode.LINT_ERROR: 8,
    ErrorCode.PROPERTIES_ERROR: 9,
    ErrorCode.EXAMPLES_ERROR: 10,
}

# Global options, set by the callback
state: Dict[str, Any] = {"json": False, "quiet": False, "verbose": False, "options": {}}


def exit_code_for(code: ErrorCode) -> int:
    """Process exit code for an error code (2 for anything unmapped)."""
    return EXIT_CODES.get(code, 2)


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def _print_json(value: Any) -> None:
    typer.echo(json.dumps(_to_jsonable(value), indent=2))


def _run(coro) -> Any:
    """Run a coroutine, turning monitor errors into exit codes."""
    try:
        return asyncio.run(coro)
    except ComponentMonitorError as e:
        _fail(e)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        err_console.print(f"[red]❌ Unexpected error: {e}[/red]")
        if state["json"]:
            _print_json({
                "error": "An unexpected error occurred",
                "details": str(e) if state["verbose"] else "Run with --verbose for details",
            })
        raise typer.Exit(2)


def _fail(error: ComponentMonitorError) -> None:
    err_console.print(f"[red]❌ ERROR [{error.code.value}]: {error.message}[/red]")
    if state["verbose"] and error.details:
        err_console.print(f"Error details: {json.dumps(error.details, indent=2)}")
    if state["json"]:
        _print_json({"error": error.message, "code": error.code.value, "timestamp": error.timestamp})
    raise typer.Exit(exit_code_for(error.code))


def _success(message: str) -> None:
    if not state["quiet"] and not state["json"]:
        console.print(f"[green]✅ {message}[/green]")


def _not_found(name: str) -> None:
    _fail(ComponentMonitorError(f'Component "{name}" not found', ErrorCode.SEARCH_ERROR))


def _component_line(component: Any) -> str:
    icon = STATUS_ICONS.get(component.status, "❓")
    return f"{icon} [bold]{component.name}[/bold] ({component.tag_name or 'N/A'})"


def _print_component(component: Any) -> None:
    console.print(_component_line(component))
    console.print(f"   Status: {component.status}")
    console.print(f"   Level: {component.maturity_level}")
    console.print(f"   Recommendation: {component.recommendation}")


def version_callback(value: bool):
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.callback()
def main(
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
    verbose: bool = typer.Option(False, "--verbose", help="Show detailed logging"),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in milliseconds (1000-300000, default: 10000)",
    ),
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """VA Design System component status monitor."""
    state["json"] = json_output
    state["quiet"] = quiet
    state["verbose"] = verbose

    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR if quiet else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        config = MonitorConfig.from_env(request_timeout_ms=timeout)
    except ComponentMonitorError as e:
        _fail(e)
    state["options"] = config.model_dump()


@app.command()
def check(component: str = typer.Argument(..., help="Component name, tag or interface name")):
    """
    Check status of a specific component.

    Example:
        va-components check va-button
    """
    result = _run(check_component(component, state["options"]))
    if result is None:
        _not_found(component)

    if state["json"]:
        _print_json(result)
    else:
        _print_component(result)
    _success("Command completed successfully")


@app.command()
def props(component: str = typer.Argument(..., help="Component name, tag or interface name")):
    """
    Show properties for a component.

    Example:
        va-components props va-button
    """
    result = _run(get_component_properties(component, state["options"]))
    if result is None:
        _not_found(component)

    if state["json"]:
        _print_json(result)
        return

    summary = result.component
    console.print(f"🔧 [bold]{summary.name}[/bold] ({summary.tag_name or 'N/A'}) Properties")
    console.print(f"   Status: {summary.status} | Level: {summary.maturity_level}\n")

    if not result.properties:
        console.print("   No properties found")
        return

    table = Table(title=f"{len(result.properties)} property/properties")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Description")
    for prop in result.properties:
        table.add_row(f"{prop.name}{'?' if prop.optional else ''}", prop.type, prop.description or "")
    console.print(table)
    _success("Command completed successfully")


@app.command()
def examples(component: str = typer.Argument(..., help="Component name, tag or interface name")):
    """
    Show usage examples for a component.

    Official Storybook examples are used when available, generated examples
    otherwise.

    Example:
        va-components examples va-button
    """
    result = _run(get_official_examples(component, state["options"]))
    if result is None:
        _not_found(component)

    if state["json"]:
        _print_json(result)
        return

    summary = result.component
    console.print(f"🚀 [bold]{summary.name}[/bold] ({summary.tag_name or 'N/A'}) Examples")
    console.print(f"   Status: {summary.status} | Level: {summary.maturity_level}\n")

    if not result.examples:
        console.print("   No examples available")
        return

    plural = "s" if len(result.examples) > 1 else ""
    console.print(f"   Found {len(result.examples)} example{plural}:\n")
    for index, example in enumerate(result.examples, 1):
        console.print(f"   {index}. [bold]{example.title}[/bold]")
        console.print(f"      {example.description}")
        console.print(f"      Framework: {example.framework}\n")
        console.print(example.code, markup=False, highlight=False)
        console.print()
    _success("Command completed successfully")


@app.command()
def validate(components: List[str] = typer.Argument(..., help="Component names to validate")):
    """
    Validate multiple components.

    Example:
        va-components validate va-button va-alert va-card
    """
    result = _run(validate_components(components, state["options"]))

    if state["json"]:
        _print_json(result)
        return

    summary = result.summary
    console.print(f"\nValidation Results ({summary.found}/{summary.total} found):\n")
    for entry in result.validation:
        if entry.found:
            console.print(f"✅ {entry.requested}: {_component_line(entry.component)}")
        else:
            console.print(f"❌ {entry.requested}: Not found")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Recommended: {summary.recommended}")
    console.print(f"  Caution: {summary.caution}")
    console.print(f"  Not found: {summary.not_found}")
    _success("Command completed successfully")


@app.command()
def lint(components: List[str] = typer.Argument(..., help="Component names to lint")):
    """
    Lint components and show issues.

    Exits with code 8 when a component is not found.

    Example:
        va-components lint va-modal va-table
    """
    result = _run(lint_components(components, state["options"]))

    if state["json"]:
        _print_json(result)
        return

    if not result.issues:
        console.print("[green]✅ No issues found![/green]")
    else:
        console.print(f"\nFound {len(result.issues)} issue(s):\n")
        for issue in result.issues:
            console.print(f"{SEVERITY_ICONS[issue.severity]} {issue.component}: {issue.message}", markup=False)

    if result.has_errors:
        _fail(ComponentMonitorError("Linting found errors", ErrorCode.LINT_ERROR))
    _success("Command completed successfully")


@app.command()
def quick(
    component: str = typer.Argument(..., help="Component name, tag or interface name"),
    commands: List[str] = typer.Argument(..., help="Commands to run: check, props, examples, validate, lint"),
):
    """
    Run several commands for one component.

    Example:
        va-components quick va-button check props examples
    """
    runners = {
        "check": lambda: check(component),
        "props": lambda: props(component),
        "examples": lambda: examples(component),
        "validate": lambda: validate([component]),
        "lint": lambda: lint([component]),
    }
    unknown = [cmd for cmd in commands if cmd not in runners]
    if unknown:
        _fail(ComponentMonitorError(
            f"Unknown quick command: {', '.join(unknown)}. Available: {', '.join(runners)}",
            ErrorCode.INVALID_INPUT,
        ))

    logger.info(f"Running quick commands for {component}: {', '.join(commands)}")
    for index, cmd in enumerate(commands, 1):
        if not state["json"]:
            console.print(f"\n{'=' * 50}")
            console.print(f"🚀 Running: {cmd} {component} ({index}/{len(commands)})")
            console.print(f"{'=' * 50}\n")
        runners[cmd]()


@app.command("list")
def list_components(
    status_filter: Optional[str] = typer.Argument(
        None,
        metavar="[FILTER]",
        help="recommended, stable, experimental, caution or issues",
    ),
):
    """
    List components, optionally filtered.

    Example:
        va-components list recommended
    """
    async def _list():
        monitor = ComponentMonitor(state["options"])
        if status_filter is None:
            return list((await monitor.get_components()).values())
        wanted = status_filter.strip().lower()
        if wanted == "caution":
            return await monitor.get_caution_components()
        if wanted in LIST_FILTERS:
            return await monitor.get_components_by_status(LIST_FILTERS[wanted])
        raise ComponentMonitorError(
            f"Unknown filter: {status_filter}. Available: recommended, stable, experimental, caution, issues",
            ErrorCode.INVALID_INPUT,
        )

    components = _run(_list())

    if state["json"]:
        _print_json(components)
        return

    table = Table(title=f"Found {len(components)} component(s)")
    table.add_column("", width=2)
    table.add_column("Name", style="cyan")
    table.add_column("Tag")
    table.add_column("Status")
    table.add_column("Level")
    table.add_column("Recommendation")
    for component in components:
        table.add_row(
            STATUS_ICONS.get(component.status, "❓"),
            component.name,
            component.tag_name or "N/A",
            component.status,
            component.maturity_level,
            component.recommendation,
        )
    console.print(table)
    _success("Command completed successfully")


@app.command()
def report():
    """
    Generate a full component report.

    Example:
        va-components --json report
    """
    result = _run(ComponentMonitor(state["options"]).generate_report())

    if state["json"]:
        _print_json(result)
        return

    console.print("\n[bold cyan]VA Component Library Report[/bold cyan]")
    console.print(f"Generated: {result.last_updated}\n")
    console.print(f"Total Components: [bold]{result.total}[/bold]\n")

    for title, counts in (("Status Distribution", result.status_counts),
                          ("Category Distribution", result.category_counts)):
        table = Table(title=title)
        table.add_column("Value", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("Share", justify="right")
        for key, count in counts.items():
            share = count / result.total * 100 if result.total else 0.0
            table.add_row(key, str(count), f"{share:.1f}%")
        console.print(table)

    console.print(f"\nRecommended Components: [green]{len(result.recommended)}[/green]")
    console.print(f"Components needing caution: [yellow]{len(result.caution)}[/yellow]")
    _success("Command completed successfully")


if __name__ == "__main__":
    app()
