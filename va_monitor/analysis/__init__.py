"""Property role analysis for example synthesis."""

from .semantic_analyzer import (
    CONTENT_STRATEGY_RULES,
    PURPOSE_RULES,
    ROLE_RULES,
    DecisionRule,
    RoleRule,
    SemanticAnalyzer,
    analyze_component,
)

__all__ = [
    "CONTENT_STRATEGY_RULES",
    "PURPOSE_RULES",
    "ROLE_RULES",
    "DecisionRule",
    "RoleRule",
    "SemanticAnalyzer",
    "analyze_component",
]
