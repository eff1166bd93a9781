"""
Assemble the component table from a raw declaration document.
"""

import logging
from typing import Dict, Optional

from va_monitor.classifier import classify
from va_monitor.extractors.block_extractor import BlockExtractor
from va_monitor.extractors.property_parser import PropertyParser
from va_monitor.schemas import ComponentRecord

logger = logging.getLogger(__name__)


class ComponentMetadataParser:
    """
    Turn ``components.d.ts`` text into a table keyed by interface name.

    The table is built in a fresh dict and returned whole; callers swap it in
    atomically.
    """

    def __init__(
        self,
        block_extractor: Optional[BlockExtractor] = None,
        property_parser: Optional[PropertyParser] = None,
    ):
        self.block_extractor = block_extractor or BlockExtractor()
        self.property_parser = property_parser or PropertyParser()

    def parse(self, content: str) -> Dict[str, ComponentRecord]:
        """
        Parse component metadata.

        Args:
            content: Raw declaration document

        Returns:
            Mapping of interface name to ComponentRecord (later duplicates win)
        """
        components: Dict[str, ComponentRecord] = {}

        for block in self.block_extractor.extract_blocks(content):
            status, recommendation = classify(block.maturity_category, block.maturity_level)
            components[block.interface_name] = ComponentRecord(
                name=block.component_name,
                interface_name=block.interface_name,
                maturity_category=block.maturity_category,
                maturity_level=block.maturity_level,
                guidance_href=block.guidance_href,
                translations=block.translations,
                properties=self.property_parser.parse_properties(block.interface_body),
                status=status,
                recommendation=recommendation,
            )

        # Second pass: tag names, ignoring mappings to unknown interfaces
        for tag_name, interface_name in self.block_extractor.extract_tag_mappings(content):
            component = components.get(interface_name)
            if component is not None:
                component.tag_name = tag_name

        logger.info(f"Parsed {len(components)} components")
        return components


def parse_component_metadata(content: str) -> Dict[str, ComponentRecord]:
    """Convenience function wrapping ComponentMetadataParser.parse."""
    return ComponentMetadataParser().parse(content)
