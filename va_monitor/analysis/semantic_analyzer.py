"""
Semantic analysis of component properties.

Infers what each property is for (visible text, accessibility, state,
configuration, event, slot) purely from its name and type, then derives the
component's overall purpose and the content strategy used when synthesizing
examples. No component-specific logic: every decision comes from the ordered
rule tables below, so new patterns are additive.
"""

import re
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Sequence

from va_monitor.schemas import ComponentRecord, PropertyRecord, SemanticAnalysis

logger = logging.getLogger(__name__)


def _patterns(*sources: str) -> List[Pattern]:
    return [re.compile(source) for source in sources]


def _any_match(patterns: Sequence[Pattern], name: str) -> bool:
    return any(pattern.search(name) for pattern in patterns)


# ============================================================================
# NAMING PATTERNS
# ============================================================================

VISIBLE_CONTENT_PATTERNS = _patterns(
    r'^text$', r'^headline$', r'^title$', r'^message$', r'^content$', r'^header$',
    r'text$', r'heading$', r'caption$',
)
ACCESSIBILITY_PATTERNS = _patterns(
    r'aria', r'describedby', r'screenreader',
    r'^label$',  # exact only, not labelHeader etc
)
STATE_PATTERNS = _patterns(
    r'visible', r'open', r'closed', r'expanded', r'collapsed', r'disabled',
    r'loading', r'active', r'selected', r'checked', r'show', r'hide',
)
CONFIG_PATTERNS = _patterns(
    r'variant', r'size', r'type', r'status', r'level', r'theme', r'style', r'mode',
)
SLOT_PATTERNS = _patterns(r'slot', r'content', r'body', r'children')
FORM_PATTERNS = _patterns(
    r'name', r'value', r'required', r'error', r'validation', r'input', r'field', r'form',
)
CONDITIONAL_PATTERNS = _patterns(r'closeable', r'dismissible', r'expandable', r'collapsible', r'toggle')


def is_visible_content_prop(name: str, prop_type: str) -> bool:
    return _any_match(VISIBLE_CONTENT_PATTERNS, name) and "string" in prop_type


def is_accessibility_prop(name: str, prop_type: str) -> bool:
    return _any_match(ACCESSIBILITY_PATTERNS, name)


def is_state_prop(name: str, prop_type: str) -> bool:
    return _any_match(STATE_PATTERNS, name) and "boolean" in prop_type


def is_config_prop(name: str, prop_type: str) -> bool:
    # Union and enum types are configuration whatever their name
    return _any_match(CONFIG_PATTERNS, name) or "|" in prop_type or "enum" in prop_type


def is_event_prop(name: str, prop_type: str) -> bool:
    return name.startswith("on") and ("=>" in prop_type or "function" in prop_type)


def is_slot_prop(name: str, prop_type: str) -> bool:
    return _any_match(SLOT_PATTERNS, name)


def is_form_related_prop(name: str) -> bool:
    return _any_match(FORM_PATTERNS, name)


def is_conditional_prop(name: str) -> bool:
    return _any_match(CONDITIONAL_PATTERNS, name)


# ============================================================================
# RULE TABLES
# ============================================================================

@dataclass(frozen=True)
class RoleRule:
    """Assigns a property to ``bucket`` (and sets ``flag``) when ``matches``."""
    bucket: str
    matches: Callable[[str, str], bool]
    flag: Optional[str] = None


@dataclass(frozen=True)
class DecisionRule:
    """First-match rule over a finished analysis."""
    result: str
    matches: Callable[[SemanticAnalysis], bool]


# Priority order: a property lands in the first bucket whose rule matches.
# Properties matching none are left out of every bucket.
ROLE_RULES: List[RoleRule] = [
    RoleRule("visible_text_props", is_visible_content_prop),
    RoleRule("accessibility_props", is_accessibility_prop, "has_accessibility_enhancements"),
    RoleRule("state_props", is_state_prop, "has_states"),
    RoleRule("config_props", is_config_prop),
    RoleRule("event_props", is_event_prop, "is_interactive"),
    RoleRule("slot_props", is_slot_prop, "has_slots"),
]


def _names(props: Sequence[PropertyRecord]) -> List[str]:
    return [p.name.lower() for p in props]


def _has_name(props: Sequence[PropertyRecord], exact: str) -> bool:
    return exact in _names(props)


def _has_name_containing(props: Sequence[PropertyRecord], *fragments: str) -> bool:
    return any(fragment in name for name in _names(props) for fragment in fragments)


PURPOSE_RULES: List[DecisionRule] = [
    DecisionRule("action", lambda a: _has_name_containing(a.event_props, "click", "submit")),
    DecisionRule("input", lambda a: a.is_form_related and (
        _has_name(a.visible_text_props, "label") or _has_name(a.accessibility_props, "label"))),
    DecisionRule("notification", lambda a: _has_name(a.config_props, "status")
                 and _has_name_containing(a.visible_text_props, "message", "headline")),
    DecisionRule("navigation", lambda a: _has_name_containing(a.config_props, "href", "link")),
    DecisionRule("container", lambda a: a.has_slots or _has_name_containing(a.visible_text_props, "headline")),
    DecisionRule("data", lambda a: _has_name_containing(a.config_props, "data", "list")),
]
DEFAULT_PURPOSE = "general"

CONTENT_STRATEGY_RULES: List[DecisionRule] = [
    DecisionRule("visible-first", lambda a: len(a.visible_text_props) > 0),
    DecisionRule("form-label", lambda a: a.is_form_related and _has_name(a.accessibility_props, "label")),
    DecisionRule("accessibility-only", lambda a: len(a.accessibility_props) > 0),
]
DEFAULT_CONTENT_STRATEGY = "minimal"


def first_match(rules: Sequence[DecisionRule], analysis: SemanticAnalysis, default: str) -> str:
    for rule in rules:
        if rule.matches(analysis):
            return rule.result
    return default


# ============================================================================
# ANALYZER
# ============================================================================

class SemanticAnalyzer:
    """
    Categorize a component's properties by role.

    Example:
        >>> analysis = SemanticAnalyzer().analyze(component)
        >>> analysis.inferred_purpose
        'action'
    """

    def __init__(
        self,
        role_rules: Optional[List[RoleRule]] = None,
        purpose_rules: Optional[List[DecisionRule]] = None,
        strategy_rules: Optional[List[DecisionRule]] = None,
    ):
        self.role_rules = role_rules if role_rules is not None else ROLE_RULES
        self.purpose_rules = purpose_rules if purpose_rules is not None else PURPOSE_RULES
        self.strategy_rules = strategy_rules if strategy_rules is not None else CONTENT_STRATEGY_RULES

    def analyze(self, component: ComponentRecord) -> SemanticAnalysis:
        """
        Analyze a component's properties.

        Args:
            component: Parsed component record

        Returns:
            SemanticAnalysis with role buckets, flags, purpose and strategy
        """
        return self.analyze_properties(component.properties)

    def analyze_properties(self, properties: Sequence[PropertyRecord]) -> SemanticAnalysis:
        analysis = SemanticAnalysis(properties=list(properties))

        for prop in properties:
            name = prop.name.lower()
            prop_type = prop.type.lower()

            if not prop.optional:
                analysis.required_props.append(prop)

            for rule in self.role_rules:
                if rule.matches(name, prop_type):
                    getattr(analysis, rule.bucket).append(prop)
                    if rule.flag:
                        setattr(analysis, rule.flag, True)
                    break

            # Independent of role bucketing
            if is_form_related_prop(name):
                analysis.is_form_related = True
            if is_conditional_prop(name):
                analysis.has_conditional_content = True

        analysis.inferred_purpose = first_match(self.purpose_rules, analysis, DEFAULT_PURPOSE)
        analysis.content_strategy = first_match(self.strategy_rules, analysis, DEFAULT_CONTENT_STRATEGY)

        logger.debug(
            f"Analyzed {len(properties)} properties: purpose={analysis.inferred_purpose}, "
            f"strategy={analysis.content_strategy}"
        )
        return analysis


def analyze_component(component: ComponentRecord) -> SemanticAnalysis:
    """Convenience function wrapping SemanticAnalyzer.analyze."""
    return SemanticAnalyzer().analyze(component)
