"""Usage example synthesis and official example lookup."""

from .composite_patterns import COMPOSITE_PATTERNS, ChildCount, CompositePattern, detect_composite
from .example_synthesizer import ExampleSynthesizer, default_tag_name, synthesize_examples
from .storybook import StorybookExampleFetcher, extract_html_from_story

__all__ = [
    "COMPOSITE_PATTERNS",
    "ChildCount",
    "CompositePattern",
    "detect_composite",
    "ExampleSynthesizer",
    "default_tag_name",
    "synthesize_examples",
    "StorybookExampleFetcher",
    "extract_html_from_story",
]
