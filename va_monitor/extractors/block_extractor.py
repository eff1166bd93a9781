"""
Component block extraction from ``components.d.ts``.

The declaration document pairs a JSDoc block carrying component metadata
(``@componentName``, ``@maturityCategory``, ``@maturityLevel``, optional
``@guidanceHref`` and ``@translations``) with the ``interface VaXxx { ... }``
that follows it. Pairing is delegated to a CommentMatcher so that a stricter
strategy can replace the default nearest-preceding heuristic.
"""

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass
class ComponentBlock:
    """Intermediate representation of one annotated interface."""
    interface_name: str
    interface_body: str
    component_name: str
    maturity_category: str
    maturity_level: str
    guidance_href: Optional[str] = None
    translations: List[str] = field(default_factory=list)


@dataclass
class CommentSpan:
    """A JSDoc comment located in the document."""
    start: int
    end: int
    body: str


# ============================================================================
# COMMENT MATCHERS
# ============================================================================

class CommentMatcher(ABC):
    """Strategy selecting the metadata comment for an interface block."""

    @abstractmethod
    def select(self, content: str, block_start: int, comments: Sequence[CommentSpan]) -> Optional[CommentSpan]:
        """
        Pick the comment describing the block starting at ``block_start``.

        Args:
            content: Full document text
            block_start: Offset of the interface keyword
            comments: All comments in document order

        Returns:
            Selected comment or None
        """


class NearestPrecedingCommentMatcher(CommentMatcher):
    """Take the last comment that ends before the block, whatever lies between."""

    def select(self, content: str, block_start: int, comments: Sequence[CommentSpan]) -> Optional[CommentSpan]:
        selected = None
        for comment in comments:
            if comment.end > block_start:
                break
            selected = comment
        return selected


class AdjacentCommentMatcher(NearestPrecedingCommentMatcher):
    """
    Like NearestPrecedingCommentMatcher but only when nothing except
    whitespace and declaration modifiers separates the comment from the block.
    """

    SEPARATOR_PATTERN = re.compile(r'^(?:\s|export\b|declare\b)*$')

    def select(self, content: str, block_start: int, comments: Sequence[CommentSpan]) -> Optional[CommentSpan]:
        selected = super().select(content, block_start, comments)
        if selected is None:
            return None
        if not self.SEPARATOR_PATTERN.match(content[selected.end:block_start]):
            return None
        return selected


# ============================================================================
# BLOCK EXTRACTOR
# ============================================================================

class BlockExtractor:
    """
    Extract annotated component interfaces from the declaration document.

    Example:
        >>> extractor = BlockExtractor()
        >>> blocks = extractor.extract_blocks(content)
        >>> blocks[0].component_name
        'Button'
    """

    INTERFACE_PATTERN = re.compile(r'interface\s+(Va\w+)\s*\{([\s\S]*?)\n\s*\}')
    COMMENT_PATTERN = re.compile(r'/\*\*([\s\S]*?)\*/')

    # Tag lines are anchored on the leading '*' of a JSDoc line
    COMPONENT_NAME_PATTERN = re.compile(r'\*\s+@componentName\s+([^\n\r]+)')
    MATURITY_CATEGORY_PATTERN = re.compile(r'\*\s+@maturityCategory\s+([^\n\r]+)')
    MATURITY_LEVEL_PATTERN = re.compile(r'\*\s+@maturityLevel\s+([^\n\r]+)')
    GUIDANCE_HREF_PATTERN = re.compile(r'\*\s+@guidanceHref\s+([^\n\r]+)')
    TRANSLATIONS_PATTERN = re.compile(r'\*\s+@translations\s+([^\n\r]+)')

    # "va-button": LocalJSX.VaButton
    TAG_MAPPING_PATTERN = re.compile(r'"(va-[^"]+)":\s+LocalJSX\.(\w+)')

    def __init__(self, matcher: Optional[CommentMatcher] = None):
        """
        Initialize block extractor.

        Args:
            matcher: Comment pairing strategy (default: nearest preceding comment)
        """
        self.matcher = matcher or NearestPrecedingCommentMatcher()

    def extract_blocks(self, content: str) -> List[ComponentBlock]:
        """
        Extract every interface that has complete metadata.

        Blocks whose selected comment lacks any of the three required tags are
        dropped, not defaulted.

        Args:
            content: Raw declaration document

        Returns:
            ComponentBlocks in document order
        """
        comments = [
            CommentSpan(start=m.start(), end=m.end(), body=m.group(1))
            for m in self.COMMENT_PATTERN.finditer(content)
        ]

        blocks: List[ComponentBlock] = []
        skipped = 0

        for match in self.INTERFACE_PATTERN.finditer(content):
            interface_name, interface_body = match.group(1), match.group(2)

            comment = self.matcher.select(content, match.start(), comments)
            if comment is None:
                skipped += 1
                continue

            block = self._parse_comment(comment.body, interface_name, interface_body)
            if block is None:
                skipped += 1
                continue

            blocks.append(block)

        logger.debug(f"Extracted {len(blocks)} component blocks ({skipped} interfaces without metadata)")
        return blocks

    def _parse_comment(self, comment: str, interface_name: str, interface_body: str) -> Optional[ComponentBlock]:
        """Read metadata tags from a comment body; None if a required tag is missing."""
        name_match = self.COMPONENT_NAME_PATTERN.search(comment)
        category_match = self.MATURITY_CATEGORY_PATTERN.search(comment)
        level_match = self.MATURITY_LEVEL_PATTERN.search(comment)

        if not (name_match and category_match and level_match):
            return None

        guidance_match = self.GUIDANCE_HREF_PATTERN.search(comment)

        return ComponentBlock(
            interface_name=interface_name,
            interface_body=interface_body,
            component_name=name_match.group(1).strip(),
            maturity_category=category_match.group(1).strip(),
            maturity_level=level_match.group(1).strip(),
            guidance_href=guidance_match.group(1).strip() if guidance_match else None,
            translations=[m.group(1).strip() for m in self.TRANSLATIONS_PATTERN.finditer(comment)],
        )

    def extract_tag_mappings(self, content: str) -> List[Tuple[str, str]]:
        """
        Find custom element tag declarations.

        Returns:
            (tag_name, interface_name) pairs in document order
        """
        return [(m.group(1), m.group(2)) for m in self.TAG_MAPPING_PATTERN.finditer(content)]


def extract_blocks(content: str, matcher: Optional[CommentMatcher] = None) -> List[ComponentBlock]:
    """Convenience function wrapping BlockExtractor.extract_blocks."""
    return BlockExtractor(matcher=matcher).extract_blocks(content)
