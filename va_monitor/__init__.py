"""
VA Design System Monitor - component status for the VA Design System.

Fetches the component library's ``components.d.ts`` declaration document,
extracts each component's maturity metadata and properties, and answers
questions about component status, usage and examples.

Main Components:
- Fetcher: HTTP retrieval with retries and rate-limit detection
- Extractors: Doc comment / interface pairing and property parsing
- Classifier: Maturity to status and recommendation mapping
- Cache: Freshness window with stale fallback
- Analysis / Synthesis: Property roles and generated usage examples
- Monitor: Public operations over all of the above

Usage:
    from va_monitor import ComponentMonitor

    monitor = ComponentMonitor({"request_timeout_ms": 15000})
    component = await monitor.get_component_by_name("va-button")
    report = await monitor.generate_report()
"""

__version__ = "2.1.0"

from .errors import ComponentMonitorError, ErrorCode, validate_input
from .config import MonitorConfig
from .schemas import (
    ComponentExamples,
    ComponentProperties,
    ComponentRecord,
    ComponentReport,
    ComponentStatus,
    ComponentSummary,
    ExampleSnippet,
    LintIssue,
    LintResult,
    MaturityCategory,
    MaturityLevel,
    PropertyRecord,
    SemanticAnalysis,
    ValidationEntry,
    ValidationResult,
    ValidationSummary,
)
from .classifier import classify, determine_status
from .monitor import (
    ComponentMonitor,
    check_component,
    get_component_examples,
    get_component_properties,
    get_official_examples,
    lint_components,
    validate_components,
)

__all__ = [
    "__version__",
    # Errors / config
    "ComponentMonitorError",
    "ErrorCode",
    "validate_input",
    "MonitorConfig",
    # Schemas
    "ComponentExamples",
    "ComponentProperties",
    "ComponentRecord",
    "ComponentReport",
    "ComponentStatus",
    "ComponentSummary",
    "ExampleSnippet",
    "LintIssue",
    "LintResult",
    "MaturityCategory",
    "MaturityLevel",
    "PropertyRecord",
    "SemanticAnalysis",
    "ValidationEntry",
    "ValidationResult",
    "ValidationSummary",
    # Classification
    "classify",
    "determine_status",
    # Monitor
    "ComponentMonitor",
    "check_component",
    "get_component_examples",
    "get_component_properties",
    "get_official_examples",
    "lint_components",
    "validate_components",
]
