"""
Maturity classification.

Maps a component's (maturity category, maturity level) pair to a public
status and a fixed recommendation sentence. Total over all inputs: unknown
levels classify as UNKNOWN rather than raising.
"""

from typing import Dict, Tuple

from va_monitor.schemas import ComponentStatus, MaturityCategory, MaturityLevel


STATUS_BY_LEVEL: Dict[str, ComponentStatus] = {
    MaturityLevel.BEST_PRACTICE.value: ComponentStatus.RECOMMENDED,
    MaturityLevel.DEPLOYED.value: ComponentStatus.STABLE,
    MaturityLevel.CANDIDATE.value: ComponentStatus.EXPERIMENTAL,
    MaturityLevel.AVAILABLE.value: ComponentStatus.AVAILABLE_WITH_ISSUES,
}

RECOMMENDATIONS: Dict[ComponentStatus, str] = {
    ComponentStatus.USE_WITH_CAUTION: "Use with caution - may have known issues or be under evaluation",
    ComponentStatus.RECOMMENDED: "Recommended for production use - stable and follows best practices",
    ComponentStatus.STABLE: "Safe for production use - actively deployed",
    ComponentStatus.EXPERIMENTAL: "Experimental - use in development/testing only",
    ComponentStatus.AVAILABLE_WITH_ISSUES: "Available but may have issues - test thoroughly before use",
    ComponentStatus.UNKNOWN: "Status unknown - verify before use",
}


def determine_status(category: str, level: str) -> ComponentStatus:
    """Status for a category/level pair; the caution category overrides the level."""
    if category == MaturityCategory.CAUTION.value:
        return ComponentStatus.USE_WITH_CAUTION
    return STATUS_BY_LEVEL.get(level, ComponentStatus.UNKNOWN)


def classify(category: str, level: str) -> Tuple[ComponentStatus, str]:
    """
    Classify a component.

    Args:
        category: @maturityCategory value
        level: @maturityLevel value

    Returns:
        (status, recommendation)
    """
    status = determine_status(category, level)
    return status, RECOMMENDATIONS[status]
