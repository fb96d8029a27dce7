"""Block document to HTML rendering."""

import json
import logging
from collections.abc import Mapping
from html import escape
from typing import Any, Callable, Optional

from ..errors import MalformedInputError, ResourceExhaustedError
from ..models.blocks import (
    COLUMNS_COUNT,
    Block,
    CodeBlock,
    ColumnBlock,
    ColumnsBlock,
    EmbedBlock,
    HeaderBlock,
    ImageBlock,
    LayerBlock,
    ParagraphBlock,
    QuoteBlock,
    coerce_blocks,
)
from ..models.document import BlockDocument
from .fragment import ASCII_WHITESPACE

logger = logging.getLogger(__name__)


def _open_tag(name: str, attributes: list[tuple[str, Optional[str]]]) -> str:
    """Build an opening tag, leaving out attributes with empty values."""
    parts = [name]
    parts.extend(f'{key}="{escape(value, quote=True)}"' for key, value in attributes if value)
    return f"<{' '.join(parts)}>"


class BlocksToHtml:
    """
    Renders blocks back into HTML.

    Each block becomes one fragment; fragments are joined with newlines at
    every nesting level. Text payloads are raw markup and are written
    unescaped. Blocks of unknown type are skipped.

    Example:
        renderer = BlocksToHtml()
        html = renderer.render_document(document_json)
    """

    def __init__(self) -> None:
        self._renderers: dict[str, Callable[[Any], str]] = {
            "paragraph": self._paragraph,
            "delimiter": self._delimiter,
            "code": self._code,
            "header": self._header,
            "quote": self._quote,
            "layer": self._layer,
            "columns": self._columns,
            "column": self._column,
            "embed": self._embed,
            "image": self._image,
        }

    @property
    def block_types(self) -> frozenset[str]:
        """Block types this renderer knows."""
        return frozenset(self._renderers)

    def render(self, blocks: list[Block]) -> list[str]:
        """
        Render a block sequence.

        Args:
            blocks: Validated blocks

        Returns:
            One HTML fragment per renderable block
        """
        fragments = []
        for block in blocks:
            fragment = self.render_block(block)
            if fragment is not None:
                fragments.append(fragment)
        return fragments

    def render_block(self, block: Block) -> Optional[str]:
        renderer = self._renderers.get(block.type)
        if renderer is None:
            logger.debug(f"No renderer for block type {block.type!r}")
            return None
        return renderer(block)

    def load_blocks(self, document: Any) -> list[Block]:
        """
        Extract the block sequence from a serialized document.

        Accepts a JSON string or bytes, a mapping, or a BlockDocument.
        Undecodable JSON and a missing or malformed ``blocks`` field both
        give an empty sequence.

        Raises:
            MalformedInputError: If ``document`` is of an unsupported type
        """
        if isinstance(document, BlockDocument):
            return list(document.blocks)

        if isinstance(document, (str, bytes)):
            try:
                document = json.loads(document)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"Could not decode block document: {e}")
                return []
        elif not isinstance(document, Mapping):
            raise MalformedInputError(
                f"Expected block document as JSON, mapping or BlockDocument, got {type(document).__name__}"
            )

        blocks = document.get("blocks") if isinstance(document, Mapping) else None
        if not isinstance(blocks, list):
            logger.warning("Block document has no blocks list")
            return []

        return coerce_blocks(blocks)

    def render_document(self, document: Any) -> str:
        """
        Render a serialized document to HTML.

        Envelope metadata (version, time, checksum) is ignored.

        Args:
            document: JSON string or bytes, mapping, or BlockDocument

        Returns:
            Newline-joined HTML fragments

        Raises:
            MalformedInputError: If ``document`` is of an unsupported type
            ResourceExhaustedError: If the document is nested too deeply
        """
        try:
            return "\n".join(self.render(self.load_blocks(document)))
        except (RecursionError, MemoryError) as e:
            raise ResourceExhaustedError(f"Could not render block document: {type(e).__name__}") from e

    def _paragraph(self, block: ParagraphBlock) -> str:
        return f"<p>{block.data.text}</p>"

    def _delimiter(self, block: Block) -> str:
        return "<hr>"

    def _code(self, block: CodeBlock) -> str:
        return f"<pre>{block.data.text}</pre>"

    def _header(self, block: HeaderBlock) -> str:
        level = block.data.level
        return f"<h{level}>{block.data.text}</h{level}>"

    def _quote(self, block: QuoteBlock) -> str:
        lines = ["<blockquote>"]
        for item in block.data.content:
            item = item.strip(ASCII_WHITESPACE)
            if item:
                lines.append(f"<p>{item}</p>")
        if block.data.cite:
            lines.append(f"<p><cite>{block.data.cite}</cite></p>")
        lines.append("</blockquote>")
        return "\n".join(lines)

    def _layer(self, block: LayerBlock) -> str:
        return f"<div>{self._children(block)}</div>"

    def _columns(self, block: ColumnsBlock) -> str:
        return f'<div class="grid">{self._children(block)}</div>'

    def _column(self, block: ColumnBlock) -> str:
        size = block.data.size if block.data.size is not None else COLUMNS_COUNT
        return f'<div class="column column-{size}">{self._children(block)}</div>'

    def _embed(self, block: EmbedBlock) -> str:
        return f"<figure>{block.data.content}</figure>"

    def _image(self, block: ImageBlock) -> str:
        data = block.data
        lines = ["<figure>"]

        if data.link is not None:
            lines.append(_open_tag("a", [("href", data.link.href), ("target", data.link.target)]))

        lines.append(_open_tag("img", [("src", data.src), ("alt", data.alt), ("data-image", data.id)]))

        if data.link is not None:
            lines.append("</a>")

        if data.caption:
            lines.append(f"<figcaption>{data.caption}</figcaption>")

        lines.append("</figure>")
        return "\n".join(lines)

    def _children(self, block: Any) -> str:
        return "\n".join(self.render(block.data.content))
