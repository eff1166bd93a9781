"""
Example synthesis from semantic analysis.

Generates HTML usage snippets for a component from its property analysis:
always a basic example, plus state, accessibility and form-context variants
when the analysis calls for them. Composite components get generated child
elements.
"""

import re
import logging
from typing import Callable, Dict, List, Optional, Tuple

from va_monitor.analysis.semantic_analyzer import SemanticAnalyzer
from va_monitor.schemas import ComponentRecord, ExampleSnippet, PropertyRecord, SemanticAnalysis
from va_monitor.synthesis.composite_patterns import (
    COMPOSITE_PATTERNS,
    CompositePattern,
    detect_composite,
)

logger = logging.getLogger(__name__)

Attribute = Tuple[str, Optional[str]]

BREADCRUMB_LIST = '[{"href": "/", "label": "Home"}, {"label": "Current Page"}]'

# (purpose, exact name, substring, value); one of exact/substring is set
PURPOSE_VALUES: List[Tuple[str, Optional[str], Optional[str], str]] = [
    ("action", "text", None, "Submit Application"),
    ("action", "label", None, "Submit your application"),
    ("action", None, "submit", "true"),
    ("action", "type", None, "submit"),
    ("notification", None, "headline", "Important Update"),
    ("notification", "status", None, "info"),
    ("notification", "visible", None, "true"),
    ("input", "label", None, "Email Address"),
    ("input", "name", None, "email"),
    ("input", "required", None, "true"),
    ("navigation", "label", None, "Navigation"),
    ("navigation", None, "href", "/example-page"),
    ("container", None, "headline", "Service Information"),
]

SLOT_CONTENT: Dict[str, str] = {
    "notification": (
        '\n  <h2 slot="headline">Important Update</h2>'
        "\n  <p>Please review the updated information before proceeding.</p>\n"
    ),
    "container": (
        '\n  <h2 slot="headline">Service Information</h2>'
        "\n  <p>Learn about the benefits and services available to you.</p>\n"
    ),
}


def default_tag_name(component: ComponentRecord) -> str:
    """Tag for a component, deriving ``va-<name>`` when the document has none."""
    if component.tag_name:
        return component.tag_name
    return "va-" + re.sub(r'\s+', '-', component.name.strip().lower())


def render_attributes(attributes: List[Attribute]) -> str:
    """Render attributes; None values become bare boolean attributes."""
    parts = []
    for name, value in attributes:
        if value is None:
            parts.append(f" {name}")
        elif '"' in value:
            parts.append(f" {name}='{value}'")
        else:
            parts.append(f' {name}="{value}"')
    return "".join(parts)


def _number_value(name: str) -> str:
    if "level" in name:
        return "2"
    if "timeout" in name:
        return "5000"
    return "1"


def generic_example_value(prop: PropertyRecord) -> str:
    """Last-resort value from the property's name and type."""
    name = prop.name.lower()
    prop_type = prop.type.lower()

    if "label" in name:
        return "Descriptive label for screen readers"
    if "describedby" in name:
        return "additional-info"
    if "aria" in name:
        return "ARIA attribute value"

    if "boolean" in prop_type:
        return "true"
    if "number" in prop_type:
        return _number_value(name)
    if "string" in prop_type:
        if name == "text":
            return "Click me"
        if name == "headline":
            return "Important Notice"
        if name == "status":
            return "info"
        if name == "variant":
            return "primary"
        if name == "type":
            return "button"
        if "url" in name or "href" in name:
            return "https://va.gov"
        if "id" in name:
            return "unique-id"
        if "class" in name:
            return "custom-class"
        return "Example value"
    if "array" in prop_type:
        return "[]"
    if "object" in prop_type:
        return "{}"
    return "value"


class ExampleSynthesizer:
    """
    Generate usage examples for a component.

    Example:
        >>> synthesizer = ExampleSynthesizer()
        >>> examples = synthesizer.synthesize(component)
        >>> examples[0].title
        'Basic Usage'
    """

    def __init__(
        self,
        analyzer: Optional[SemanticAnalyzer] = None,
        composite_patterns: Optional[List[CompositePattern]] = None,
    ):
        self.analyzer = analyzer or SemanticAnalyzer()
        self.composite_patterns = composite_patterns if composite_patterns is not None else COMPOSITE_PATTERNS

    # ========================================================================
    # ENTRY POINT
    # ========================================================================

    def synthesize(
        self,
        component: ComponentRecord,
        analysis: Optional[SemanticAnalysis] = None,
    ) -> List[ExampleSnippet]:
        """
        Build the examples for a component.

        A generator that fails is logged and its example omitted; the rest
        are still returned.

        Args:
            component: Parsed component record
            analysis: Precomputed analysis (computed here if None)

        Returns:
            Examples, "Basic Usage" first
        """
        analysis = analysis or self.analyzer.analyze(component)
        tag_name = default_tag_name(component)
        composite = detect_composite(tag_name, self.composite_patterns)

        generators: List[Tuple[bool, Callable[[], Optional[ExampleSnippet]]]] = [
            (True, lambda: self.basic_example(tag_name, analysis, composite)),
            (analysis.has_states, lambda: self.state_variation_example(tag_name, analysis, composite)),
            (analysis.has_accessibility_enhancements,
             lambda: self.accessibility_example(tag_name, analysis, composite)),
            (analysis.is_form_related, lambda: self.form_context_example(tag_name, analysis, composite)),
        ]

        examples: List[ExampleSnippet] = []
        for enabled, generate in generators:
            if not enabled:
                continue
            try:
                example = generate()
            except Exception as e:
                logger.warning(f"Skipping example for {tag_name}: {e}", exc_info=True)
                continue
            if example is not None:
                examples.append(example)

        return examples

    # ========================================================================
    # VALUE GENERATION
    # ========================================================================

    def generate_value(
        self,
        prop: PropertyRecord,
        analysis: SemanticAnalysis,
        composite: Optional[CompositePattern] = None,
    ) -> str:
        """
        Contextual attribute value for a property.

        Order: array literals, first union member, composite parent label,
        purpose-specific literal, type-based fallback.
        """
        name = prop.name.lower()
        prop_type = prop.type.lower()

        if "array" in prop_type or "[]" in prop_type:
            if "breadcrumb" in name:
                return BREADCRUMB_LIST
            return "[]"

        if "|" in prop_type:
            options = [option.strip().strip("'\"") for option in prop.type.split("|")]
            meaningful = [option for option in options if option and option != "undefined"]
            if meaningful:
                return meaningful[0]

        if name == "label" and composite is not None and composite.parent_label:
            return composite.parent_label

        for purpose, exact, fragment, value in PURPOSE_VALUES:
            if purpose != analysis.inferred_purpose:
                continue
            if (exact is not None and name == exact) or (fragment is not None and fragment in name):
                return value

        if "boolean" in prop_type:
            return "true"
        if "number" in prop_type:
            return _number_value(name)
        if "object" in prop_type:
            return "{}"

        return generic_example_value(prop)

    def essential_config_props(self, analysis: SemanticAnalysis) -> List[PropertyRecord]:
        """Configuration worth showing when a component has no visible text."""
        if analysis.inferred_purpose == "notification":
            status = next((p for p in analysis.config_props if p.name == "status"), None)
            visible = next((p for p in analysis.state_props if p.name == "visible"), None)
            return [p for p in (status, visible) if p is not None]

        if analysis.inferred_purpose == "action":
            chosen = next((p for p in analysis.config_props if p.name == "type"), None) \
                or next((p for p in analysis.config_props if p.name == "variant"), None)
            return [chosen] if chosen else []

        return analysis.config_props[:1]

    # ========================================================================
    # CHILD CONTENT
    # ========================================================================

    def composite_children(self, composite: CompositePattern) -> str:
        children = []
        for index in range(1, composite.child_count.default + 1):
            if composite.render_child is not None:
                children.append(f"\n    {composite.render_child(index)}")
            else:
                attrs = render_attributes(list(composite.child_values(index).items()))
                children.append(f"\n  <{composite.child_element}{attrs}></{composite.child_element}>")
        return "".join(children) + "\n"

    def slot_content(self, analysis: SemanticAnalysis) -> str:
        if not analysis.has_slots:
            return ""
        return SLOT_CONTENT.get(analysis.inferred_purpose, "")

    # ========================================================================
    # EXAMPLES
    # ========================================================================

    def basic_example(
        self,
        tag_name: str,
        analysis: SemanticAnalysis,
        composite: Optional[CompositePattern] = None,
    ) -> ExampleSnippet:
        """Required properties, the primary content property and, for
        text-less components, the essential configuration."""
        attributes: List[Attribute] = []
        rendered = set()

        def add(prop: PropertyRecord) -> None:
            if prop.name in rendered:
                return
            rendered.add(prop.name)
            attributes.append((prop.name, self.generate_value(prop, analysis, composite)))

        for prop in analysis.required_props:
            add(prop)

        if analysis.content_strategy == "visible-first" and analysis.visible_text_props:
            add(analysis.visible_text_props[0])
        elif analysis.content_strategy == "form-label":
            label = next((p for p in analysis.accessibility_props if p.name == "label"), None)
            if label is not None:
                add(label)

        if not analysis.visible_text_props and analysis.config_props:
            for prop in self.essential_config_props(analysis):
                add(prop)

        content = self.composite_children(composite) if composite else self.slot_content(analysis)

        return ExampleSnippet(
            title="Basic Usage",
            description=f"Simple example showing essential {analysis.inferred_purpose} functionality",
            code=f"<{tag_name}{render_attributes(attributes)}>{content}</{tag_name}>",
        )

    def state_variation_example(
        self,
        tag_name: str,
        analysis: SemanticAnalysis,
        composite: Optional[CompositePattern] = None,
    ) -> Optional[ExampleSnippet]:
        state_props = analysis.state_props[:2]
        if not state_props:
            return None

        attributes: List[Attribute] = []
        if analysis.visible_text_props:
            content_prop = analysis.visible_text_props[0]
            attributes.append((content_prop.name, self.generate_value(content_prop, analysis, composite)))
        attributes.extend((prop.name, None) for prop in state_props)

        return ExampleSnippet(
            title="With State Variations",
            description=f"Example showing different {' and '.join(p.name for p in state_props)} states",
            code=f"<{tag_name}{render_attributes(attributes)}></{tag_name}>",
        )

    def accessibility_example(
        self,
        tag_name: str,
        analysis: SemanticAnalysis,
        composite: Optional[CompositePattern] = None,
    ) -> Optional[ExampleSnippet]:
        if not analysis.has_accessibility_enhancements:
            return None

        attributes: List[Attribute] = []
        if analysis.visible_text_props:
            content_prop = analysis.visible_text_props[0]
            attributes.append((content_prop.name, self.generate_value(content_prop, analysis, composite)))
        for prop in analysis.accessibility_props[:2]:
            attributes.append((prop.name, self.generate_value(prop, analysis, composite)))

        return ExampleSnippet(
            title="Accessibility Enhanced",
            description="Example with enhanced screen reader support and context",
            code=f"<{tag_name}{render_attributes(attributes)}></{tag_name}>",
        )

    def form_context_example(
        self,
        tag_name: str,
        analysis: SemanticAnalysis,
        composite: Optional[CompositePattern] = None,
    ) -> Optional[ExampleSnippet]:
        if not analysis.is_form_related:
            return None

        attributes: List[Attribute] = [
            (prop.name, self.generate_value(prop, analysis, composite))
            for prop in analysis.accessibility_props
            if prop.name == "label"
        ]
        if not analysis.required_props:
            attributes.extend([("name", "example-field"), ("required", None)])

        return ExampleSnippet(
            title="In Form Context",
            description="Example showing proper form integration",
            code=(
                "<form>\n"
                f"  <{tag_name}{render_attributes(attributes)}></{tag_name}>\n"
                '  <va-button text="Submit" submit></va-button>\n'
                "</form>"
            ),
        )


def synthesize_examples(component: ComponentRecord) -> List[ExampleSnippet]:
    """Convenience function wrapping ExampleSynthesizer.synthesize."""
    return ExampleSynthesizer().synthesize(component)
