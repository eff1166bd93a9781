"""Tests for official Storybook example lookup."""

import asyncio

import httpx
import pytest

from conftest import RecordingSleep
from va_monitor.config import MonitorConfig
from va_monitor.errors import ComponentMonitorError, ErrorCode
from va_monitor.fetcher import DocumentFetcher
from va_monitor.synthesis import StorybookExampleFetcher, extract_html_from_story
from va_monitor.synthesis.storybook import clean_extracted_html, story_paths

BUTTON_STORY = '''
import { VaButton } from '@department-of-veterans-affairs/web-components/react-bindings';

const Template = ({ text, secondary }) => {
  return (
    <va-button text={text} secondary={secondary}></va-button>
  );
};

export const Default = Template.bind(null);
'''


def make_storybook(handler, sleep=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    fetcher = DocumentFetcher(MonitorConfig(), client=client, sleep=sleep or RecordingSleep(), token="")
    return StorybookExampleFetcher(fetcher)


def test_story_paths_cover_both_layouts():
    paths = story_paths("va-button")

    assert len(paths) == 8
    assert paths[0] == "packages/storybook/stories/va-button.stories.js"
    assert "packages/web-components/src/components/va-button/va-button.stories.ts" in paths


def test_extracts_jsx_return_block():
    examples = extract_html_from_story(BUTTON_STORY, "va-button", "stories/va-button.stories.js")

    assert len(examples) == 1
    assert examples[0].code == "<va-button text={text} secondary={secondary}></va-button>"
    assert examples[0].source == "storybook"
    assert examples[0].title == "Storybook Example 1"
    assert "stories/va-button.stories.js" in examples[0].description


def test_direct_occurrences_are_added_when_new():
    story = '''
export const Primary = () => html`<va-alert status="info"><h2 slot="headline">Hi</h2></va-alert>`;
'''
    examples = extract_html_from_story(story, "va-alert", "x.stories.js")

    assert len(examples) == 1
    assert examples[0].title == "Storybook Direct Example 1"


def test_clean_extracted_html_normalizes_markup():
    raw = '<va-accordion className="x">\\n    <va-accordion-item header="A"></va-accordion-item></va-accordion>'

    cleaned = clean_extracted_html(raw, "va-accordion")

    assert cleaned == (
        '<va-accordion class="x">\n'
        '  <va-accordion-item header="A"></va-accordion-item>\n'
        '</va-accordion>'
    )


def test_first_story_with_examples_wins():
    requested = []

    def handler(request):
        requested.append(request.url.path)
        if request.url.path.endswith("va-button.stories.ts"):
            return httpx.Response(200, text=BUTTON_STORY)
        return httpx.Response(404)

    sleep = RecordingSleep()
    examples = asyncio.run(make_storybook(handler, sleep).fetch_examples("va-button"))

    assert len(examples) == 1
    assert len(requested) == 2
    assert sleep.delays == [0.5, 0.5]


def test_no_story_found_returns_empty():
    examples = asyncio.run(make_storybook(lambda r: httpx.Response(404)).fetch_examples("va-ghost"))

    assert examples == []


def test_unexpected_status_skips_path():
    def handler(request):
        if request.url.path.endswith("va-button.stories.js"):
            return httpx.Response(500)
        if request.url.path.endswith("va-button.stories.tsx"):
            return httpx.Response(200, text=BUTTON_STORY)
        return httpx.Response(404)

    examples = asyncio.run(make_storybook(handler).fetch_examples("va-button"))

    assert len(examples) == 1


def test_rate_limit_stops_probing():
    requested = []

    def handler(request):
        requested.append(request.url.path)
        return httpx.Response(403, headers={"x-ratelimit-remaining": "0"})

    with pytest.raises(ComponentMonitorError) as exc_info:
        asyncio.run(make_storybook(handler).fetch_examples("va-button"))

    assert exc_info.value.code == ErrorCode.RATE_LIMIT_EXCEEDED
    assert len(requested) == 1
