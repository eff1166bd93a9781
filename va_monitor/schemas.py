"""
Pydantic schemas for the VA Design System monitor.

Architecture:
- PropertyRecord: One property parsed from a component interface body
- ComponentRecord: Metadata, properties and derived status for one component
- SemanticAnalysis: Per-request property role analysis (never cached)
- ExampleSnippet: Synthesized or official usage example
- Validation / Lint / Report models: Results of the public operations

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``), matching the declaration document's naming.
"""

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComponentStatus(str, Enum):
    """Derived public-facing classification."""
    RECOMMENDED = "RECOMMENDED"
    STABLE = "STABLE"
    EXPERIMENTAL = "EXPERIMENTAL"
    AVAILABLE_WITH_ISSUES = "AVAILABLE_WITH_ISSUES"
    USE_WITH_CAUTION = "USE_WITH_CAUTION"
    UNKNOWN = "UNKNOWN"


class MaturityCategory(str, Enum):
    USE = "use"
    CAUTION = "caution"


class MaturityLevel(str, Enum):
    BEST_PRACTICE = "best_practice"
    DEPLOYED = "deployed"
    CANDIDATE = "candidate"
    AVAILABLE = "available"


CAUTION_STATUSES = (
    ComponentStatus.USE_WITH_CAUTION,
    ComponentStatus.EXPERIMENTAL,
    ComponentStatus.AVAILABLE_WITH_ISSUES,
)
PRODUCTION_READY_STATUSES = (ComponentStatus.RECOMMENDED, ComponentStatus.STABLE)

HTML_FRAMEWORK = "HTML/Web Components"


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# ============================================================================
# PARSED DOCUMENT SCHEMAS
# ============================================================================

class PropertyRecord(CamelModel):
    """Property declared in a component interface."""
    name: str = Field(description="Property name, quotes stripped")
    type: str = Field(description="Raw type expression as written in the document")
    optional: bool = Field(False, description="True when declared with the '?' marker")
    description: Optional[str] = Field(None, description="Text of the preceding doc comment")


class ComponentRecord(CamelModel):
    """
    Metadata for one component.

    ``interface_name`` is the unique key; ``tag_name`` is filled in by the
    tag-to-interface mapping pass when the document declares one.
    """
    name: str = Field(description="Display name from @componentName")
    interface_name: str = Field(description="Interface name, e.g. 'VaButton'")
    tag_name: Optional[str] = Field(None, description="Custom element tag, e.g. 'va-button'")
    maturity_category: str = Field(description="@maturityCategory value (use, caution)")
    maturity_level: str = Field(description="@maturityLevel value (best_practice, deployed, ...)")
    guidance_href: Optional[str] = Field(None, description="@guidanceHref value")
    translations: List[str] = Field(default_factory=list, description="@translations values in order")
    properties: List[PropertyRecord] = Field(default_factory=list)
    status: ComponentStatus = Field(ComponentStatus.UNKNOWN, description="Derived status")
    recommendation: str = Field("", description="Human readable recommendation")

    def summary(self) -> "ComponentSummary":
        return ComponentSummary(
            name=self.name,
            tag_name=self.tag_name,
            status=self.status,
            maturity_category=self.maturity_category,
            maturity_level=self.maturity_level,
            recommendation=self.recommendation,
        )


class ComponentSummary(CamelModel):
    """Short component description embedded in operation results."""
    name: str
    tag_name: Optional[str] = None
    status: ComponentStatus
    maturity_category: Optional[str] = None
    maturity_level: str
    recommendation: Optional[str] = None


# ============================================================================
# SEMANTIC ANALYSIS / EXAMPLES
# ============================================================================

InferredPurpose = Literal["action", "input", "notification", "navigation", "container", "data", "general"]
ContentStrategy = Literal["visible-first", "form-label", "accessibility-only", "minimal"]


class SemanticAnalysis(CamelModel):
    """Role breakdown of a component's properties, recomputed per request."""
    properties: List[PropertyRecord] = Field(default_factory=list)
    visible_text_props: List[PropertyRecord] = Field(default_factory=list)
    accessibility_props: List[PropertyRecord] = Field(default_factory=list)
    state_props: List[PropertyRecord] = Field(default_factory=list)
    config_props: List[PropertyRecord] = Field(default_factory=list)
    event_props: List[PropertyRecord] = Field(default_factory=list)
    slot_props: List[PropertyRecord] = Field(default_factory=list)
    required_props: List[PropertyRecord] = Field(default_factory=list)

    is_form_related: bool = False
    is_interactive: bool = False
    has_states: bool = False
    has_conditional_content: bool = False
    has_accessibility_enhancements: bool = False
    has_slots: bool = False

    inferred_purpose: InferredPurpose = "general"
    content_strategy: ContentStrategy = "minimal"


class ExampleSnippet(CamelModel):
    """Usage example for a component."""
    title: str
    description: str
    code: str
    framework: str = HTML_FRAMEWORK
    source: Optional[str] = Field(None, description="'storybook' for official examples")


class ComponentExamples(CamelModel):
    component: ComponentSummary
    examples: List[ExampleSnippet] = Field(default_factory=list)


class ComponentProperties(CamelModel):
    component: ComponentSummary
    properties: List[PropertyRecord] = Field(default_factory=list)


# ============================================================================
# VALIDATION / LINT / REPORT
# ============================================================================

class ValidationEntry(CamelModel):
    requested: str
    found: bool
    component: Optional[ComponentSummary] = None


class ValidationSummary(CamelModel):
    total: int = 0
    found: int = 0
    not_found: int = 0
    recommended: int = 0
    caution: int = 0


class ValidationResult(CamelModel):
    validation: List[ValidationEntry] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)


class LintIssue(CamelModel):
    type: Literal["NOT_FOUND", "CAUTION", "EXPERIMENTAL", "ISSUES"]
    component: str
    message: str
    severity: Literal["error", "warning", "info"]


class LintResult(CamelModel):
    issues: List[LintIssue] = Field(default_factory=list)
    has_errors: bool = False
    has_warnings: bool = False
    summary: ValidationSummary = Field(default_factory=ValidationSummary)


class ComponentReport(CamelModel):
    total: int
    status_counts: Dict[str, int] = Field(default_factory=dict)
    category_counts: Dict[str, int] = Field(default_factory=dict)
    last_updated: Optional[str] = Field(None, description="ISO timestamp of the cached fetch")
    recommended: List[ComponentRecord] = Field(default_factory=list)
    caution: List[ComponentRecord] = Field(default_factory=list)
