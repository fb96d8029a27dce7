"""Protocol definitions for block conversion."""

from typing import Any, Protocol, Union

from ..models.blocks import Block
from ..models.document import BlockDocument


class BlockParser(Protocol):
    """
    Protocol for turning HTML into a block document.

    Implementations must not raise on malformed markup; unrecognized
    elements are dropped.
    """

    def convert(self, html: Union[str, bytes]) -> BlockDocument:
        """
        Convert HTML to a block document.

        Args:
            html: HTML document or fragment

        Returns:
            Envelope with version, time, checksum and blocks
        """
        ...


class BlockRenderer(Protocol):
    """
    Protocol for turning blocks back into HTML.

    Implementations skip block types they do not know.
    """

    def render(self, blocks: list[Block]) -> list[str]:
        """Render each block to one HTML fragment."""
        ...

    def render_document(self, document: Any) -> str:
        """Render a whole document (JSON, mapping or BlockDocument) to HTML."""
        ...
