"""Tests for component block extraction."""

from va_monitor.extractors import (
    AdjacentCommentMatcher,
    BlockExtractor,
    NearestPrecedingCommentMatcher,
    extract_blocks,
)

BUTTON_DOC = '''
/**
 * @componentName Button
 * @maturityCategory use
 * @maturityLevel deployed
 * @guidanceHref button
 * @translations English
 * @translations Spanish
 */
interface VaButton {
    "text"?: string;
}
'''


def test_extracts_button_metadata():
    blocks = extract_blocks(BUTTON_DOC)

    assert len(blocks) == 1
    block = blocks[0]
    assert block.interface_name == "VaButton"
    assert block.component_name == "Button"
    assert block.maturity_category == "use"
    assert block.maturity_level == "deployed"
    assert block.guidance_href == "button"
    assert block.translations == ["English", "Spanish"]
    assert '"text"?: string;' in block.interface_body


def test_block_missing_required_tag_is_dropped():
    content = '''
/**
 * @componentName Card
 * @maturityCategory use
 */
interface VaCard {
    "headline"?: string;
}
'''
    assert extract_blocks(content) == []


def test_interface_without_any_comment_is_dropped():
    assert extract_blocks("interface VaLonely {\n    \"x\"?: string;\n}\n") == []


def test_non_va_interfaces_are_ignored():
    content = BUTTON_DOC + '''
/**
 * @componentName Other
 * @maturityCategory use
 * @maturityLevel deployed
 */
interface HTMLOtherElement {
    "x"?: string;
}
'''
    blocks = extract_blocks(content)

    assert [b.interface_name for b in blocks] == ["VaButton"]


def test_nearest_of_two_comments_is_used():
    content = '''
/**
 * @componentName Old Name
 * @maturityCategory caution
 * @maturityLevel candidate
 */
/**
 * @componentName Link
 * @maturityCategory use
 * @maturityLevel best_practice
 */
interface VaLink {
    "href": string;
}
'''
    blocks = extract_blocks(content)

    assert len(blocks) == 1
    assert blocks[0].component_name == "Link"
    assert blocks[0].maturity_level == "best_practice"


def test_optional_tags_default_when_absent():
    content = '''
/**
 * @componentName Pagination
 * @maturityCategory use
 * @maturityLevel available
 */
interface VaPagination {
    "page": number;
}
'''
    block = extract_blocks(content)[0]

    assert block.guidance_href is None
    assert block.translations == []


def test_tag_values_are_trimmed():
    content = '''
/**
 * @componentName   Date input
 * @maturityCategory use
 * @maturityLevel deployed
 */
interface VaDate {
    "value"?: string;
}
'''
    block = extract_blocks(content)[0]

    assert block.component_name == "Date input"
    assert block.maturity_category == "use"


def test_extract_tag_mappings():
    content = '''
"va-button": LocalJSX.VaButton & JSXBase.HTMLAttributes<HTMLVaButtonElement>;
"va-alert": LocalJSX.VaAlert & JSXBase.HTMLAttributes<HTMLVaAlertElement>;
'''
    mappings = BlockExtractor().extract_tag_mappings(content)

    assert mappings == [("va-button", "VaButton"), ("va-alert", "VaAlert")]


def test_adjacent_matcher_rejects_distant_comment():
    content = '''
/**
 * @componentName Button
 * @maturityCategory use
 * @maturityLevel deployed
 */
const somethingElse = 1;
interface VaButton {
    "text"?: string;
}
'''
    assert len(BlockExtractor(NearestPrecedingCommentMatcher()).extract_blocks(content)) == 1
    assert BlockExtractor(AdjacentCommentMatcher()).extract_blocks(content) == []


def test_adjacent_matcher_allows_export_modifier():
    content = BUTTON_DOC.replace("interface VaButton", "export interface VaButton")

    blocks = BlockExtractor(AdjacentCommentMatcher()).extract_blocks(content)

    assert [b.interface_name for b in blocks] == ["VaButton"]
