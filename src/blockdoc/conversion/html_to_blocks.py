"""HTML to block document conversion."""

import logging
import re
from typing import Callable, Optional, Union

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from ..errors import BlockdocError, MalformedInputError, ResourceExhaustedError
from ..models.blocks import (
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
)
from ..models.document import BlockDocument
from .fragment import ASCII_WHITESPACE, FragmentExtractor

logger = logging.getLogger(__name__)

# Walked through as if they were not there
WRAPPER_TAGS = {"html", "body"}

_HEADING_TAG = re.compile(r"h([1-6])", re.IGNORECASE)
_COLUMN_SIZE = re.compile(r"column-([0-9]{1,2})", re.IGNORECASE)


def _is_text(node: object) -> bool:
    """True for plain text nodes (not comments, CDATA or doctypes)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _attribute(tag: Tag, name: str) -> Optional[str]:
    """Return a non-empty attribute value, or None."""
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _class_list(tag: Tag) -> list[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return [cls.strip() for cls in classes if cls.strip()]


class HtmlToBlocks:
    """
    Converts HTML into a block document.

    Walks the parsed tree one level at a time and classifies each element
    against a fixed set of block constructs. Unrecognized elements produce
    no block. ``div`` elements are walked recursively into container blocks.

    Example:
        converter = HtmlToBlocks()
        document = converter.convert("<h1>Title</h1><p>Body</p>")
        print(document.to_json())
    """

    def __init__(
        self,
        parser: str = "html.parser",
        extractor: Optional[FragmentExtractor] = None,
    ):
        """
        Initialize the converter.

        Args:
            parser: BeautifulSoup tree builder name
            extractor: Inner-markup extractor (uses default if None)
        """
        self._parser = parser
        self._extractor = extractor or FragmentExtractor()
        self._handlers: dict[str, Callable[[Tag], Optional[Block]]] = {
            "p": self._paragraph,
            "hr": self._delimiter,
            "pre": self._code,
            "blockquote": self._quote,
            "figure": self._figure,
            "div": self._container,
        }

    def parse(self, html: Union[str, bytes]) -> BeautifulSoup:
        """
        Parse HTML leniently into a tree.

        Args:
            html: HTML string, or UTF-8 bytes

        Returns:
            Parsed document

        Raises:
            MalformedInputError: If the input is not text or the parser rejects it
            BlockdocError: If the configured parser is not installed
        """
        if isinstance(html, bytes):
            html = html.decode("utf-8", errors="replace")
        if not isinstance(html, str):
            raise MalformedInputError(f"Expected HTML as str or bytes, got {type(html).__name__}")

        try:
            return BeautifulSoup(html, self._parser)
        except FeatureNotFound as e:
            raise BlockdocError(f"HTML parser not available: {self._parser}") from e
        except ParserRejectedMarkup as e:
            raise MalformedInputError(f"HTML parser rejected markup: {e}") from e

    def walk(self, node: Tag) -> list[Block]:
        """
        Classify the element children of ``node`` into blocks.

        An ``html`` or ``body`` child replaces the whole level: its walk is
        returned as is.

        Args:
            node: Parent element (or the parsed document)

        Returns:
            Blocks in document order
        """
        blocks: list[Block] = []

        for child in node.children:
            if not isinstance(child, Tag):
                continue

            name = child.name.lower()
            if name in WRAPPER_TAGS:
                return self.walk(child)

            handler = self._handler_for(name)
            if handler is None:
                continue

            block = handler(child)
            if block is not None:
                blocks.append(block)

        return blocks

    def convert(self, html: Union[str, bytes]) -> BlockDocument:
        """
        Convert HTML to a block document.

        Args:
            html: HTML document or fragment

        Returns:
            Envelope with version, time, checksum and blocks

        Raises:
            MalformedInputError: If the input cannot be parsed at all
            ResourceExhaustedError: If the tree is too deep or too large to walk
        """
        try:
            soup = self.parse(html)
            blocks = self.walk(soup)
            document = BlockDocument.build(blocks)
        except (RecursionError, MemoryError) as e:
            raise ResourceExhaustedError(f"Could not convert HTML: {type(e).__name__}") from e

        logger.debug(f"Converted HTML into {len(blocks)} top-level blocks")
        return document

    def _handler_for(self, name: str) -> Optional[Callable[[Tag], Optional[Block]]]:
        handler = self._handlers.get(name)
        if handler is None and _HEADING_TAG.fullmatch(name):
            return self._header
        return handler

    def _paragraph(self, node: Tag) -> Block:
        return ParagraphBlock(data=TextData(text=self._extractor.extract(node)))

    def _delimiter(self, node: Tag) -> Block:
        return DelimiterBlock()

    def _code(self, node: Tag) -> Block:
        text = self._extractor.extract(node, collapse=False).strip(ASCII_WHITESPACE)
        return CodeBlock(data=TextData(text=text))

    def _header(self, node: Tag) -> Block:
        match = _HEADING_TAG.fullmatch(node.name)
        level = int(match.group(1)) if match else 1
        return HeaderBlock(data=HeaderData(text=self._extractor.extract(node), level=level))

    def _quote(self, node: Tag) -> Optional[Block]:
        """
        Quote text comes from the text nodes of direct ``p`` children; a
        ``cite`` inside one of those paragraphs is the citation. The last
        non-empty ``cite`` wins.
        """
        content: list[str] = []
        cite: Optional[str] = None

        for paragraph in node.find_all("p", recursive=False):
            for child in paragraph.children:
                if _is_text(child):
                    content.append(self._extractor.extract(child))
                elif isinstance(child, Tag) and child.name == "cite":
                    text = self._extractor.extract(child)
                    if text:
                        cite = text

        content = [entry for entry in content if entry]
        if not content:
            return None

        return QuoteBlock(data=QuoteData(content=content, cite=cite))

    def _figure(self, node: Tag) -> Optional[Block]:
        """
        A figure holding an ``img`` (directly or inside an ``a``) becomes an
        image block; anything else is kept as raw embed markup.
        """
        is_image = False
        image: dict = {}

        for child in node.children:
            if not isinstance(child, Tag):
                continue

            if child.name == "img":
                is_image = True
                image.update(self._image_attributes(child))

            elif child.name == "figcaption":
                caption = self._extractor.extract(child)
                if caption:
                    image["caption"] = caption

            elif child.name == "a":
                href = _attribute(child, "href")
                if href:
                    image["link"] = ImageLink(href=href, target=_attribute(child, "target"))

                for img in child.find_all("img", recursive=False):
                    is_image = True
                    image.update(self._image_attributes(img))

        if not is_image:
            content = self._extractor.extract(node)
            # Whitespace-only figures give no block
            return EmbedBlock(data=EmbedData(content=content)) if content else None

        return ImageBlock(data=ImageData(**image))

    def _image_attributes(self, img: Tag) -> dict:
        attributes = {
            "src": _attribute(img, "src"),
            "alt": _attribute(img, "alt"),
            "id": _attribute(img, "data-image"),
        }
        return {key: value for key, value in attributes.items() if value is not None}

    def _container(self, node: Tag) -> Block:
        classes = _class_list(node)
        content = self.walk(node)

        if "column" in classes:
            size = COLUMNS_COUNT
            for cls in classes:
                match = _COLUMN_SIZE.fullmatch(cls)
                if match:
                    size = int(match.group(1))
            return ColumnBlock(data=ColumnData(content=content, size=size, total=COLUMNS_COUNT))

        if "grid" in classes:
            return ColumnsBlock(data=ContainerData(content=content))

        return LayerBlock(data=ContainerData(content=content))
