"""
Composite component patterns.

Some components are only meaningful with children (a radio group needs radio
options, an accordion needs items). Each CompositePattern declares which tags
it applies to, the child element to generate, how many, and how each child's
attribute values are produced.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Tuple

ChildValue = Callable[[int], str]

HISTORICAL_FIGURES = (
    "Sojourner Truth",
    "Frederick Douglass",
    "Booker T. Washington",
    "George Washington Carver",
)


def _figure(index: int) -> str:
    if 1 <= index <= len(HISTORICAL_FIGURES):
        return HISTORICAL_FIGURES[index - 1]
    return f"Option {index}"


@dataclass(frozen=True)
class ChildCount:
    minimum: int
    maximum: int
    default: int


@dataclass(frozen=True)
class CompositePattern:
    """Declarative description of a component that needs generated children."""
    matcher: Pattern
    child_element: str
    child_count: ChildCount
    purpose: str
    # Attribute name -> value for the 1-based child index, in render order
    child_props: Tuple[Tuple[str, ChildValue], ...] = ()
    # Label for the parent element when it exposes a `label` property
    parent_label: Optional[str] = None
    # Full child markup for children that are not simple attribute carriers
    render_child: Optional[Callable[[int], str]] = None

    def matches(self, tag_name: str) -> bool:
        return bool(self.matcher.search(tag_name))

    def child_values(self, index: int) -> Dict[str, str]:
        return {name: value(index) for name, value in self.child_props}


COMPOSITE_PATTERNS: List[CompositePattern] = [
    CompositePattern(
        matcher=re.compile(r'va-radio$'),
        child_element="va-radio-option",
        child_count=ChildCount(2, 4, 3),
        purpose="form-choice-group",
        child_props=(
            ("label", _figure),
            ("name", lambda i: "group"),
            ("value", lambda i: str(i)),
        ),
        parent_label="Select one historical figure",
    ),
    CompositePattern(
        matcher=re.compile(r'va-checkbox-group$'),
        child_element="va-checkbox",
        child_count=ChildCount(2, 3, 2),
        purpose="form-choice-group",
        child_props=(
            ("label", _figure),
            ("name", lambda i: "group"),
        ),
        parent_label="Select all that apply",
    ),
    CompositePattern(
        matcher=re.compile(r'va-accordion$'),
        child_element="va-accordion-item",
        child_count=ChildCount(2, 3, 2),
        purpose="collapsible-container",
        child_props=(
            ("header", lambda i: f"Section {i}"),
        ),
    ),
    CompositePattern(
        matcher=re.compile(r'va-button-pair$'),
        child_element="va-button",
        child_count=ChildCount(2, 2, 2),
        purpose="action-group",
        child_props=(
            ("text", lambda i: "Continue" if i == 1 else "Back"),
        ),
    ),
    CompositePattern(
        matcher=re.compile(r'va-table$'),
        child_element="tr",
        child_count=ChildCount(2, 3, 2),
        purpose="data-table",
        render_child=lambda i: f"<tr><td>Row {i} Data</td></tr>",
    ),
]


def detect_composite(tag_name: str, patterns: Optional[List[CompositePattern]] = None) -> Optional[CompositePattern]:
    """
    Find the composite pattern for a tag.

    Args:
        tag_name: Custom element tag, e.g. 'va-radio'
        patterns: Pattern table (default: COMPOSITE_PATTERNS)

    Returns:
        First matching pattern or None
    """
    for pattern in (patterns if patterns is not None else COMPOSITE_PATTERNS):
        if pattern.matches(tag_name):
            return pattern
    return None
