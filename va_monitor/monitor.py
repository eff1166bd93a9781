"""
VA Design System component monitor.

Programmatic API over the component library's ``components.d.ts``: look up
components, filter by status, validate and lint component usage, report on
maturity, list properties and produce usage examples.

Usage:
    from va_monitor import ComponentMonitor

    monitor = ComponentMonitor()
    component = await monitor.get_component_by_name("va-button")
    result = await monitor.lint_components(["va-button", "va-ghost"])
"""

import time
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from va_monitor.analysis.semantic_analyzer import SemanticAnalyzer
from va_monitor.cache.manager import CacheManager, Clock, ComponentTable
from va_monitor.config import MonitorConfig
from va_monitor.errors import ComponentMonitorError, ErrorCode, validate_input
from va_monitor.extractors.metadata_parser import ComponentMetadataParser
from va_monitor.fetcher import DocumentFetcher
from va_monitor.schemas import (
    CAUTION_STATUSES,
    PRODUCTION_READY_STATUSES,
    ComponentExamples,
    ComponentProperties,
    ComponentRecord,
    ComponentReport,
    ComponentStatus,
    LintIssue,
    LintResult,
    MaturityCategory,
    SemanticAnalysis,
    ValidationEntry,
    ValidationResult,
    ValidationSummary,
)
from va_monitor.synthesis.example_synthesizer import ExampleSynthesizer, default_tag_name
from va_monitor.synthesis.storybook import StorybookExampleFetcher

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_NAMES = 50


def _validate_names(names: Any, label: str = "componentNames") -> List[str]:
    """Validate a list of component names (non-empty, at most 50, each a clean string)."""
    if not isinstance(names, (list, tuple)):
        raise ComponentMonitorError(f"{label} must be an array", ErrorCode.INVALID_INPUT)
    if not names:
        raise ComponentMonitorError(f"{label} array cannot be empty", ErrorCode.INVALID_INPUT)
    if len(names) > MAX_NAMES:
        raise ComponentMonitorError(
            f"Too many components (max {MAX_NAMES})", ErrorCode.INVALID_INPUT
        )
    for index, name in enumerate(names):
        try:
            validate_input(name, f"{label}[{index}]")
        except ComponentMonitorError as e:
            raise ComponentMonitorError(
                f"Invalid component name at index {index}: {e.message}", ErrorCode.INVALID_INPUT
            ) from e
    return list(names)


class ComponentMonitor:
    """
    Monitor for VA Design System component status.

    One instance owns one component table cache; concurrent calls share it
    and refreshes are serialized.
    """

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        *,
        config: Optional[MonitorConfig] = None,
        fetcher: Optional[DocumentFetcher] = None,
        parser: Optional[ComponentMetadataParser] = None,
        analyzer: Optional[SemanticAnalyzer] = None,
        clock: Clock = time.time,
    ):
        """
        Initialize the monitor.

        Args:
            options: Plain option mapping (see MonitorConfig fields)
            config: Prebuilt configuration; takes precedence over options
            fetcher: Document fetcher (injectable for tests)
            parser: Metadata parser (injectable, e.g. with a stricter comment matcher)
            analyzer: Semantic analyzer used for example synthesis
            clock: Time source for cache freshness
        """
        self.config = config or MonitorConfig.from_options(options)
        self.fetcher = fetcher or DocumentFetcher(self.config)
        self.parser = parser or ComponentMetadataParser()
        self.analyzer = analyzer or SemanticAnalyzer()
        self.synthesizer = ExampleSynthesizer(self.analyzer)
        self.storybook = StorybookExampleFetcher(self.fetcher)
        self.cache = CacheManager(
            self._load_table,
            freshness_window_ms=self.config.freshness_window_ms,
            clock=clock,
        )

    async def _load_table(self) -> ComponentTable:
        """Fetch and parse a complete table; empty results are failures."""
        content = await self.fetcher.fetch_document()

        if not content or not isinstance(content, str):
            raise ComponentMonitorError("Invalid component definitions received", ErrorCode.INVALID_DATA)

        table = self.parser.parse(content)
        if not table:
            raise ComponentMonitorError("No components found in definitions", ErrorCode.NO_COMPONENTS_FOUND)

        return table

    # ========================================================================
    # TABLE ACCESS
    # ========================================================================

    async def get_components(self, force_refresh: bool = False) -> ComponentTable:
        """
        Get the component table, keyed by interface name.

        Args:
            force_refresh: Bypass the freshness window

        Raises:
            ComponentMonitorError: INVALID_INPUT for a non-boolean flag, or the
                fetch error when no usable cached table exists
        """
        if not isinstance(force_refresh, bool):
            raise ComponentMonitorError("forceRefresh must be a boolean", ErrorCode.INVALID_INPUT)
        return await self.cache.get_table(force_refresh)

    async def get_component_by_name(self, name: str) -> Optional[ComponentRecord]:
        """
        Look up a component by display name, tag name or interface name.

        Exact case-insensitive matches win; otherwise the first component
        whose name or tag contains the query.
        """
        query = validate_input(name, "name").strip().lower()
        if len(query) > MAX_NAME_LENGTH:
            raise ComponentMonitorError("Component name too long", ErrorCode.INVALID_INPUT)

        try:
            components = await self.get_components()

            for component in components.values():
                if query in (
                    component.name.lower(),
                    (component.tag_name or "").lower(),
                    component.interface_name.lower(),
                ):
                    return component

            for component in components.values():
                if query in component.name.lower() or (component.tag_name and query in component.tag_name.lower()):
                    return component

            return None
        except ComponentMonitorError:
            raise
        except Exception as e:
            raise ComponentMonitorError(
                "Failed to search for component", ErrorCode.SEARCH_ERROR, {"originalError": str(e)}
            ) from e

    async def get_components_by_status(self, status: str) -> List[ComponentRecord]:
        valid = [s.value for s in ComponentStatus]
        wanted = validate_input(status, "status").strip().upper()
        if wanted not in valid:
            raise ComponentMonitorError(
                f"Invalid status. Must be one of: {', '.join(valid)}", ErrorCode.INVALID_STATUS
            )

        try:
            components = await self.get_components()
            return [c for c in components.values() if c.status == wanted]
        except ComponentMonitorError:
            raise
        except Exception as e:
            raise ComponentMonitorError(
                "Failed to filter components by status", ErrorCode.FILTER_ERROR, {"originalError": str(e)}
            ) from e

    async def get_recommended_components(self) -> List[ComponentRecord]:
        return await self.get_components_by_status(ComponentStatus.RECOMMENDED.value)

    async def get_caution_components(self) -> List[ComponentRecord]:
        """Components in the caution category or with a caution-worthy status."""
        components = await self.get_components()
        return [
            c for c in components.values()
            if c.maturity_category == MaturityCategory.CAUTION.value or c.status in CAUTION_STATUSES
        ]

    # ========================================================================
    # VALIDATION / LINT / REPORT
    # ========================================================================

    async def validate_components(self, names: Sequence[str]) -> ValidationResult:
        """
        Check each name against the component table.

        Not-found names are reported, never raised.
        """
        names = _validate_names(names)
        entries: List[ValidationEntry] = []

        for requested in names:
            component = await self.get_component_by_name(requested)
            entries.append(ValidationEntry(
                requested=requested,
                found=component is not None,
                component=component.summary() if component else None,
            ))

        summary = ValidationSummary(
            total=len(entries),
            found=sum(1 for e in entries if e.found),
            not_found=sum(1 for e in entries if not e.found),
            recommended=sum(1 for e in entries if e.component and e.component.status == ComponentStatus.RECOMMENDED),
            caution=sum(1 for e in entries if e.component and e.component.status in CAUTION_STATUSES),
        )
        return ValidationResult(validation=entries, summary=summary)

    async def lint_components(self, names: Sequence[str]) -> LintResult:
        """Report one issue per missing, cautionary, experimental or issue-prone component."""
        validation = await self.validate_components(names)
        issues: List[LintIssue] = []

        for entry in validation.validation:
            requested = entry.requested
            if not entry.found:
                issues.append(LintIssue(
                    type="NOT_FOUND",
                    component=requested,
                    message=f'Component "{requested}" not found in VA Design System',
                    severity="error",
                ))
                continue

            status = entry.component.status
            recommendation = entry.component.recommendation
            if status == ComponentStatus.USE_WITH_CAUTION:
                issues.append(LintIssue(
                    type="CAUTION",
                    component=requested,
                    message=f'Component "{requested}" should be used with caution: {recommendation}',
                    severity="warning",
                ))
            elif status == ComponentStatus.EXPERIMENTAL:
                issues.append(LintIssue(
                    type="EXPERIMENTAL",
                    component=requested,
                    message=f'Component "{requested}" is experimental: {recommendation}',
                    severity="warning",
                ))
            elif status == ComponentStatus.AVAILABLE_WITH_ISSUES:
                issues.append(LintIssue(
                    type="ISSUES",
                    component=requested,
                    message=f'Component "{requested}" may have issues: {recommendation}',
                    severity="info",
                ))

        return LintResult(
            issues=issues,
            has_errors=any(i.severity == "error" for i in issues),
            has_warnings=any(i.severity == "warning" for i in issues),
            summary=validation.summary,
        )

    async def generate_report(self, force_refresh: bool = False) -> ComponentReport:
        components = await self.get_components(force_refresh)

        status_counts = Counter(c.status for c in components.values())
        category_counts = Counter(c.maturity_category for c in components.values())

        return ComponentReport(
            total=len(components),
            status_counts=dict(status_counts),
            category_counts=dict(category_counts),
            last_updated=self.cache.last_updated,
            recommended=await self.get_recommended_components(),
            caution=await self.get_caution_components(),
        )

    async def is_production_ready(self, name: str) -> bool:
        component = await self.get_component_by_name(name)
        return component is not None and component.status in PRODUCTION_READY_STATUSES

    async def get_suggested_alternatives(self, name: str, category: Optional[str] = None) -> List[ComponentRecord]:
        """Recommended components to use instead, optionally narrowed by a name fragment."""
        component = await self.get_component_by_name(name)
        if component is None or component.status == ComponentStatus.RECOMMENDED:
            return []

        recommended = await self.get_recommended_components()
        if not category:
            return recommended

        fragment = category.lower()
        return [
            c for c in recommended
            if fragment in c.name.lower() or (c.tag_name and fragment in c.tag_name.lower())
        ]

    # ========================================================================
    # PROPERTIES / EXAMPLES
    # ========================================================================

    async def get_component_properties(self, name: str) -> Optional[ComponentProperties]:
        component = await self.get_component_by_name(name)
        if component is None:
            return None
        return ComponentProperties(component=component.summary(), properties=component.properties)

    async def analyze_component(self, name: str) -> Optional[SemanticAnalysis]:
        """Property role analysis for a component (recomputed on every call)."""
        component = await self.get_component_by_name(name)
        if component is None:
            return None
        return self.analyzer.analyze(component)

    async def get_component_examples(self, name: str) -> Optional[ComponentExamples]:
        """Synthesized usage examples for a component."""
        component = await self.get_component_by_name(name)
        if component is None:
            return None

        analysis = self.analyzer.analyze(component)
        examples = self.synthesizer.synthesize(component, analysis)
        return ComponentExamples(component=component.summary(), examples=examples)

    async def get_official_examples(self, name: str) -> Optional[ComponentExamples]:
        """
        Examples from the component library's Storybook stories, falling back
        to synthesized examples when none can be found or fetched.
        """
        component = await self.get_component_by_name(name)
        if component is None:
            return None

        tag_name = default_tag_name(component)
        try:
            examples = await self.storybook.fetch_examples(tag_name)
        except ComponentMonitorError as e:
            logger.warning(f"Failed to fetch official examples for {tag_name}, falling back to generated ones: {e}")
            examples = []

        if not examples:
            logger.info(f"Generating fallback examples for {component.name}")
            examples = self.synthesizer.synthesize(component)

        return ComponentExamples(component=component.summary(), examples=examples)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

async def _run(options: Optional[Dict[str, Any]], code: ErrorCode, message: str, operation):
    """Build a monitor from options and run one operation, wrapping unexpected errors."""
    try:
        monitor = ComponentMonitor(options)
        return await operation(monitor)
    except ComponentMonitorError:
        raise
    except Exception as e:
        raise ComponentMonitorError(message, code, {"originalError": str(e)}) from e


async def check_component(name: str, options: Optional[Dict[str, Any]] = None) -> Optional[ComponentRecord]:
    """Look up one component with a fresh monitor."""
    validate_input(name, "componentName")
    return await _run(options, ErrorCode.CHECK_ERROR, "Failed to check component",
                      lambda m: m.get_component_by_name(name))


async def validate_components(names: Sequence[str], options: Optional[Dict[str, Any]] = None) -> ValidationResult:
    _validate_names(names)
    return await _run(options, ErrorCode.VALIDATION_ERROR, "Failed to validate components",
                      lambda m: m.validate_components(names))


async def lint_components(names: Sequence[str], options: Optional[Dict[str, Any]] = None) -> LintResult:
    _validate_names(names)
    return await _run(options, ErrorCode.LINT_ERROR, "Failed to lint components",
                      lambda m: m.lint_components(names))


async def get_component_properties(name: str, options: Optional[Dict[str, Any]] = None) -> Optional[ComponentProperties]:
    validate_input(name, "componentName")
    return await _run(options, ErrorCode.PROPERTIES_ERROR, "Failed to get component properties",
                      lambda m: m.get_component_properties(name))


async def get_component_examples(name: str, options: Optional[Dict[str, Any]] = None) -> Optional[ComponentExamples]:
    validate_input(name, "componentName")
    return await _run(options, ErrorCode.EXAMPLES_ERROR, "Failed to get component examples",
                      lambda m: m.get_component_examples(name))


async def get_official_examples(name: str, options: Optional[Dict[str, Any]] = None) -> Optional[ComponentExamples]:
    validate_input(name, "componentName")
    return await _run(options, ErrorCode.EXAMPLES_ERROR, "Failed to get official examples",
                      lambda m: m.get_official_examples(name))
