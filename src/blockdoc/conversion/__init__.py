"""Conversion between HTML and block documents."""

from .blocks_to_html import BlocksToHtml
from .fragment import FragmentExtractor, collapse_whitespace
from .html_to_blocks import HtmlToBlocks
from .protocols import BlockParser, BlockRenderer

__all__ = [
    # Protocols
    "BlockParser",
    "BlockRenderer",
    # Implementations
    "HtmlToBlocks",
    "BlocksToHtml",
    "FragmentExtractor",
    "collapse_whitespace",
]
