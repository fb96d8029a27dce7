"""Blockdoc block, envelope and configuration models."""

from .blocks import (
    BLOCK_TYPES,
    COLUMNS_COUNT,
    Block,
    CodeBlock,
    ColumnBlock,
    ColumnData,
    ColumnsBlock,
    ContainerData,
    DelimiterBlock,
    EmbedBlock,
    EmbedData,
    HeaderBlock,
    HeaderData,
    ImageBlock,
    ImageData,
    ImageLink,
    LayerBlock,
    ParagraphBlock,
    QuoteBlock,
    QuoteData,
    TextData,
    coerce_blocks,
    dump_blocks,
)
from .config import BlockdocConfig, SerializeConfig
from .document import VERSION, BlockDocument, canonical_json, compute_checksum

__all__ = [
    # Blocks
    "BLOCK_TYPES",
    "COLUMNS_COUNT",
    "Block",
    "CodeBlock",
    "ColumnBlock",
    "ColumnData",
    "ColumnsBlock",
    "ContainerData",
    "DelimiterBlock",
    "EmbedBlock",
    "EmbedData",
    "HeaderBlock",
    "HeaderData",
    "ImageBlock",
    "ImageData",
    "ImageLink",
    "LayerBlock",
    "ParagraphBlock",
    "QuoteBlock",
    "QuoteData",
    "TextData",
    "coerce_blocks",
    "dump_blocks",
    # Document
    "VERSION",
    "BlockDocument",
    "canonical_json",
    "compute_checksum",
    # Config
    "BlockdocConfig",
    "SerializeConfig",
]
