"""
Official examples from the component library's Storybook stories.

Probes a fixed list of story file locations in the component-library
repository and extracts the HTML/JSX markup that uses the component.
"""

import re
import logging
from typing import List, Optional

from va_monitor.errors import ComponentMonitorError, ErrorCode
from va_monitor.fetcher import DocumentFetcher
from va_monitor.schemas import ExampleSnippet

logger = logging.getLogger(__name__)

STORY_PATH_TEMPLATES = [
    "packages/storybook/stories/{tag}.stories.js",
    "packages/storybook/stories/{tag}.stories.ts",
    "packages/storybook/stories/{tag}.stories.tsx",
    "packages/storybook/stories/{tag}-uswds.stories.js",
    "packages/storybook/stories/{tag}-uswds.stories.ts",
    "packages/storybook/stories/{tag}-uswds.stories.tsx",
    "packages/web-components/src/components/{tag}/{tag}.stories.js",
    "packages/web-components/src/components/{tag}/{tag}.stories.ts",
]

MIN_EXAMPLE_LENGTH = 10
DEDUPE_PREFIX_LENGTH = 50


def story_paths(tag_name: str) -> List[str]:
    return [template.format(tag=tag_name) for template in STORY_PATH_TEMPLATES]


def clean_extracted_html(html: str, tag_name: Optional[str] = None) -> str:
    """Unescape story source and normalize JSX markup into readable HTML."""
    html = (
        html.replace("\\n", "\n")
        .replace("\\t", "  ")
        .replace('\\"', '"')
        .replace("\\'", "'")
        .replace("className=", "class=")
    )
    html = re.sub(r'\s+', ' ', html)
    html = re.sub(r'>\s+<', '><', html)
    html = html.replace("><va-", ">\n  <va-")
    html = html.strip()

    # Nested children: put the closing tag on its own line
    if tag_name and "\n  <va-" in html:
        closing = f"</{tag_name}>"
        if html.endswith(closing) and not html.endswith("\n" + closing):
            html = html[: -len(closing)] + "\n" + closing

    return html


def extract_html_from_story(content: str, tag_name: str, file_path: str) -> List[ExampleSnippet]:
    """
    Pull component markup out of a story file.

    Markup inside ``return ( ... )`` blocks is taken first; bare occurrences
    follow unless they repeat an example already found.

    Args:
        content: Story file source
        tag_name: Component tag, e.g. 'va-button'
        file_path: Repository path (for descriptions)

    Returns:
        Official ExampleSnippets
    """
    tag = re.escape(tag_name)
    jsx_return_pattern = re.compile(
        rf'return\s*\([\s\S]*?(<{tag}[\s\S]*?</{tag}>)[\s\S]*?\)',
        re.IGNORECASE,
    )
    direct_pattern = re.compile(rf'(<{tag}[\s\S]*?</{tag}>)', re.IGNORECASE)

    examples: List[ExampleSnippet] = []

    for index, match in enumerate(jsx_return_pattern.finditer(content), start=1):
        html = clean_extracted_html(match.group(1), tag_name)
        if len(html) > MIN_EXAMPLE_LENGTH:
            examples.append(ExampleSnippet(
                title=f"Storybook Example {index}",
                description=f"Official example from {file_path}",
                code=html,
                source="storybook",
            ))

    for index, match in enumerate(direct_pattern.finditer(content), start=1):
        html = clean_extracted_html(match.group(1), tag_name)
        if len(html) <= MIN_EXAMPLE_LENGTH:
            continue
        prefix = html[:DEDUPE_PREFIX_LENGTH]
        if any(prefix in example.code for example in examples):
            continue
        examples.append(ExampleSnippet(
            title=f"Storybook Direct Example {index}",
            description=f"Official template from {file_path}",
            code=html,
            source="storybook",
        ))

    return examples


class StorybookExampleFetcher:
    """Find official examples for a component tag."""

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher

    async def fetch_examples(self, tag_name: str) -> List[ExampleSnippet]:
        """
        Probe story locations in order; the first file yielding examples wins.

        Args:
            tag_name: Component tag

        Returns:
            Official examples (empty if none found)

        Raises:
            ComponentMonitorError: RATE_LIMIT_EXCEEDED, since further probes
                cannot succeed
        """
        for path in story_paths(tag_name):
            try:
                content = await self.fetcher.fetch_repository_file(path)
            except ComponentMonitorError as e:
                if e.code == ErrorCode.RATE_LIMIT_EXCEEDED:
                    raise
                logger.info(f"No story file found: {path} ({e.code.value})")
                continue

            if not content:
                continue

            examples = extract_html_from_story(content, tag_name, path)
            if examples:
                logger.info(f"Found {len(examples)} HTML examples in {path}")
                return examples

        return []
