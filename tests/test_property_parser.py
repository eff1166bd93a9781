"""Tests for interface property parsing."""

from va_monitor.extractors import PropertyParser, parse_properties


def test_parses_optional_and_required_properties():
    body = '''
        "text"?: string;
        "headline": string;
    '''
    props = parse_properties(body)

    assert [(p.name, p.type, p.optional) for p in props] == [
        ("text", "string", True),
        ("headline", "string", False),
    ]


def test_unquoted_names_and_missing_semicolon():
    props = parse_properties("    disabled?: boolean\n    level: number;\n")

    assert props[0].name == "disabled"
    assert props[0].type == "boolean"
    assert props[0].optional is True
    assert props[1].name == "level"
    assert props[1].optional is False


def test_multiline_comment_becomes_description():
    body = '''
        /**
          * The text displayed
          * on the button.
         */
        "text"?: string;
    '''
    props = parse_properties(body)

    assert props[0].description == "The text displayed on the button."


def test_single_line_comment():
    props = parse_properties('        /** Button label */\n        "label"?: string;\n')

    assert props[0].description == "Button label"


def test_blank_line_resets_comment():
    body = '''
        /**
          * Orphaned comment
         */

        "status"?: string;
    '''
    props = parse_properties(body)

    assert props[0].description is None


def test_comment_does_not_leak_to_next_property():
    body = '''
        /**
          * First
         */
        "first"?: string;
        "second"?: string;
    '''
    props = parse_properties(body)

    assert props[0].description == "First"
    assert props[1].description is None


def test_union_and_function_types_are_kept_verbatim():
    body = '''
        "status"?: "info" | "warning" | "error";
        "onVaClick"?: (event: CustomEvent<any>) => void;
    '''
    props = PropertyParser().parse_properties(body)

    assert props[0].type == '"info" | "warning" | "error"'
    assert props[1].name == "onVaClick"
    assert props[1].type == "(event: CustomEvent<any>) => void"


def test_empty_body():
    assert parse_properties("") == []
