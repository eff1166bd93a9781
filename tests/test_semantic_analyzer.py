"""Tests for property role analysis."""

from va_monitor.analysis import SemanticAnalyzer, analyze_component
from va_monitor.analysis.semantic_analyzer import (
    is_config_prop,
    is_event_prop,
    is_state_prop,
    is_visible_content_prop,
)
from va_monitor.schemas import ComponentRecord, PropertyRecord


def prop(name, prop_type, optional=True):
    return PropertyRecord(name=name, type=prop_type, optional=optional)


def component(*props):
    return ComponentRecord(
        name="Test",
        interface_name="VaTest",
        maturity_category="use",
        maturity_level="deployed",
        properties=list(props),
    )


def names(props):
    return [p.name for p in props]


def test_button_is_an_action_with_visible_text():
    analysis = analyze_component(component(
        prop("text", "string"),
        prop("disabled", "boolean"),
        prop("onClick", "(event: MouseEvent) => void"),
    ))

    assert names(analysis.visible_text_props) == ["text"]
    assert names(analysis.state_props) == ["disabled"]
    assert names(analysis.event_props) == ["onClick"]
    assert analysis.has_states
    assert analysis.is_interactive
    assert analysis.inferred_purpose == "action"
    assert analysis.content_strategy == "visible-first"


def test_labelled_form_field_is_an_input():
    analysis = analyze_component(component(
        prop("label", "string"),
        prop("required", "boolean"),
        prop("error", "string"),
    ))

    assert names(analysis.accessibility_props) == ["label"]
    assert analysis.is_form_related
    assert analysis.has_accessibility_enhancements
    assert analysis.inferred_purpose == "input"
    assert analysis.content_strategy == "form-label"


def test_alert_is_a_notification():
    analysis = analyze_component(component(
        prop("status", '"info" | "warning"'),
        prop("headline", "string"),
        prop("visible", "boolean"),
    ))

    assert names(analysis.config_props) == ["status"]
    assert names(analysis.visible_text_props) == ["headline"]
    assert names(analysis.state_props) == ["visible"]
    assert analysis.inferred_purpose == "notification"


def test_property_lands_in_first_matching_bucket_only():
    # "title" is visible text before it could be anything else
    analysis = analyze_component(component(prop("title", "string")))

    assert names(analysis.visible_text_props) == ["title"]
    assert analysis.config_props == []
    assert analysis.slot_props == []


def test_unmatched_property_is_kept_but_unbucketed():
    analysis = analyze_component(component(prop("hint", "string")))

    assert names(analysis.properties) == ["hint"]
    for bucket in (
        analysis.visible_text_props, analysis.accessibility_props, analysis.state_props,
        analysis.config_props, analysis.event_props, analysis.slot_props,
    ):
        assert bucket == []
    assert analysis.inferred_purpose == "general"
    assert analysis.content_strategy == "minimal"


def test_required_props_are_non_optional_ones():
    analysis = analyze_component(component(
        prop("href", "string", optional=False),
        prop("text", "string"),
    ))

    assert names(analysis.required_props) == ["href"]


def test_slot_props_make_a_container():
    analysis = analyze_component(component(prop("body", "HTMLElement")))

    assert analysis.has_slots
    assert analysis.inferred_purpose == "container"


def test_conditional_content_flag():
    analysis = analyze_component(component(prop("closeable", "boolean")))

    assert analysis.has_conditional_content


def test_aria_props_are_accessibility_only_strategy():
    analysis = analyze_component(component(prop("ariaDescribedby", "string")))

    assert analysis.content_strategy == "accessibility-only"


def test_predicates():
    assert is_visible_content_prop("headline", "string")
    assert not is_visible_content_prop("headline", "number")
    assert is_state_prop("expanded", "boolean")
    assert not is_state_prop("expanded", "string")
    assert is_config_prop("anything", '"a" | "b"')
    assert is_config_prop("variant", "string")
    assert is_event_prop("onclose", "() => void")
    assert not is_event_prop("onclose", "string")


def test_custom_rules_replace_defaults():
    analyzer = SemanticAnalyzer(purpose_rules=[])

    analysis = analyzer.analyze_properties([prop("onClick", "() => void")])

    assert analysis.inferred_purpose == "general"
