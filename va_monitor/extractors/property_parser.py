"""
Property parsing for component interface bodies.

Walks an interface body line by line. JSDoc lines accumulate into a
description that attaches to the next property declaration; a blank line or
a declaration resets the buffer.
"""

import re
import logging
from typing import List

from va_monitor.schemas import PropertyRecord

logger = logging.getLogger(__name__)


class PropertyParser:
    """
    Parse ``name?: type;`` declarations with their doc comments.

    Example:
        >>> PropertyParser().parse_properties('  /** Button text */\\n  "text"?: string;')
        [PropertyRecord(name='text', type='string', optional=True, description='Button text')]
    """

    # Optional quotes around the name, optional '?' marker, type up to a trailing ';'
    PROPERTY_PATTERN = re.compile(r'^"?([^"?:]+)"?(\?)?\s*:\s*(.+?);?\s*$')

    COMMENT_OPEN = re.compile(r'^/\*\*?\s?')
    COMMENT_LINE = re.compile(r'^\*(?!/)\s?')
    COMMENT_CLOSE = re.compile(r'\s*\*/$')

    def parse_properties(self, interface_body: str) -> List[PropertyRecord]:
        """
        Parse properties in declaration order.

        Args:
            interface_body: Text between the interface braces

        Returns:
            List of PropertyRecord
        """
        properties: List[PropertyRecord] = []
        current_comment: List[str] = []

        for line in interface_body.split("\n"):
            stripped = line.strip()

            # Comments never span blank lines
            if not stripped:
                current_comment = []
                continue

            if stripped.startswith("/**") or stripped.startswith("*"):
                fragment = self._comment_text(stripped)
                if fragment:
                    current_comment.append(fragment)
                continue

            match = self.PROPERTY_PATTERN.match(stripped)
            if match:
                name, optional_marker, prop_type = match.groups()
                description = " ".join(current_comment).strip()
                properties.append(PropertyRecord(
                    name=name.strip(),
                    type=prop_type.strip(),
                    optional=optional_marker is not None,
                    description=description or None,
                ))
                current_comment = []

        return properties

    def _comment_text(self, line: str) -> str:
        """Strip JSDoc markers from a single comment line."""
        text = self.COMMENT_OPEN.sub("", line, count=1)
        text = self.COMMENT_LINE.sub("", text, count=1)
        text = self.COMMENT_CLOSE.sub("", text)
        if text in ("*/", "/"):
            return ""
        return text.strip()


def parse_properties(interface_body: str) -> List[PropertyRecord]:
    """Convenience function wrapping PropertyParser.parse_properties."""
    return PropertyParser().parse_properties(interface_body)
