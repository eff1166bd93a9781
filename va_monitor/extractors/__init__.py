"""Extraction components for the components.d.ts declaration document."""

from .block_extractor import (
    AdjacentCommentMatcher,
    BlockExtractor,
    CommentMatcher,
    ComponentBlock,
    NearestPrecedingCommentMatcher,
    extract_blocks,
)
from .property_parser import PropertyParser, parse_properties
from .metadata_parser import ComponentMetadataParser, parse_component_metadata

__all__ = [
    "AdjacentCommentMatcher",
    "BlockExtractor",
    "CommentMatcher",
    "ComponentBlock",
    "NearestPrecedingCommentMatcher",
    "extract_blocks",
    "PropertyParser",
    "parse_properties",
    "ComponentMetadataParser",
    "parse_component_metadata",
]
