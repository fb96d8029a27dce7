"""High-level HTML <-> block document API."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from .conversion.blocks_to_html import BlocksToHtml
from .conversion.html_to_blocks import HtmlToBlocks
from .conversion.protocols import BlockParser, BlockRenderer
from .errors import MalformedInputError
from .models.blocks import COLUMNS_COUNT
from .models.config import SerializeConfig
from .models.document import VERSION, BlockDocument

logger = logging.getLogger(__name__)


class ArticleSerializer:
    """
    Serializes article HTML to block documents and back.

    Example:
        serializer = ArticleSerializer()
        payload = serializer.serialize("<h1>Title</h1><p>Body</p>")
        html = serializer.unserialize(payload)
    """

    VERSION = VERSION
    COLUMNS_COUNT = COLUMNS_COUNT

    def __init__(
        self,
        config: Optional[SerializeConfig] = None,
        converter: Optional[BlockParser] = None,
        renderer: Optional[BlockRenderer] = None,
    ):
        """
        Initialize the serializer.

        Args:
            config: Parser and output settings (uses defaults if None)
            converter: HTML to blocks converter (built from config if None)
            renderer: Blocks to HTML renderer (uses default if None)
        """
        self._config = config or SerializeConfig()
        self._converter = converter or HtmlToBlocks(parser=self._config.parser)
        self._renderer = renderer or BlocksToHtml()

    @property
    def config(self) -> SerializeConfig:
        return self._config

    def to_document(self, html: Union[str, bytes]) -> BlockDocument:
        """Convert HTML to a BlockDocument without encoding it."""
        return self._converter.convert(html)

    def serialize(self, html: Union[str, bytes], pretty_print: Optional[bool] = None) -> str:
        """
        Convert HTML to block document JSON.

        Args:
            html: HTML document or fragment
            pretty_print: Indent output (defaults to the configured setting)

        Returns:
            JSON envelope with version, time, checksum and blocks
        """
        pretty = self._config.pretty_print if pretty_print is None else pretty_print
        document = self.to_document(html)
        return document.to_json(pretty=pretty, indent=self._config.indent)

    def unserialize(self, payload: Any) -> str:
        """
        Convert a block document to HTML.

        Args:
            payload: JSON string or bytes, mapping, or BlockDocument

        Returns:
            HTML fragment (empty if the payload has no usable blocks)
        """
        return self._renderer.render_document(payload)

    def load(self, payload: Any) -> BlockDocument:
        """
        Load a complete envelope, including its metadata.

        Raises:
            MalformedInputError: If the payload is not a valid envelope
        """
        if isinstance(payload, BlockDocument):
            return payload

        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise MalformedInputError(f"Invalid block document JSON: {e}") from e

        if not isinstance(payload, Mapping):
            raise MalformedInputError(f"Expected block document object, got {type(payload).__name__}")

        try:
            return BlockDocument.model_validate(payload)
        except ValidationError as e:
            raise MalformedInputError(f"Invalid block document: {e.error_count()} validation errors") from e

    def verify(self, payload: Any) -> bool:
        """
        Recompute the checksum of a serialized document.

        Blocks that cannot be rendered are dropped on load, so documents
        containing them do not verify.
        """
        document = self.load(payload)
        valid = document.verify()
        if not valid:
            logger.info(f"Checksum mismatch for document {document.checksum}")
        return valid


def serialize(html: Union[str, bytes], pretty_print: bool = True) -> str:
    """Convert HTML to block document JSON with default settings."""
    return ArticleSerializer().serialize(html, pretty_print=pretty_print)


def unserialize(payload: Any) -> str:
    """Convert a block document to HTML with default settings."""
    return ArticleSerializer().unserialize(payload)


def verify(payload: Any) -> bool:
    """Check the checksum of a block document."""
    return ArticleSerializer().verify(payload)
