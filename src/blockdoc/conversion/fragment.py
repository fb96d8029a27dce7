"""Inner-markup extraction from parsed HTML nodes."""

import re

from bs4 import NavigableString, Tag
from bs4.element import PageElement

# Only ASCII whitespace; a non-breaking space is content
_LINE_BREAK_RUN = re.compile(r"[\t\r\n]\s*", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+", re.ASCII)
ASCII_WHITESPACE = " \t\n\r\f\v"


def collapse_whitespace(markup: str) -> str:
    """
    Normalize whitespace in a markup fragment.

    Line breaks and tabs are removed together with any whitespace that
    follows them, remaining runs collapse to one space, and the result is
    trimmed.
    """
    markup = _LINE_BREAK_RUN.sub("", markup)
    markup = _WHITESPACE_RUN.sub(" ", markup)
    return markup.strip(ASCII_WHITESPACE)


class FragmentExtractor:
    """
    Returns the inner markup of a node, without the node's own tag.

    Children are serialized one by one and concatenated, so nested elements
    sharing the parent's tag name come through intact.

    Example:
        extractor = FragmentExtractor()
        text = extractor.extract(soup.p)
    """

    def __init__(self, formatter: str = "minimal"):
        """
        Initialize the extractor.

        Args:
            formatter: BeautifulSoup output formatter used for entity substitution
        """
        self._formatter = formatter

    def extract(self, node: PageElement, collapse: bool = True) -> str:
        """
        Serialize the children of ``node``.

        Args:
            node: Element or text node
            collapse: Normalize whitespace (see ``collapse_whitespace``)

        Returns:
            Markup string; a text node yields its own escaped text
        """
        if isinstance(node, Tag):
            markup = node.decode_contents(formatter=self._formatter)
        elif isinstance(node, NavigableString):
            markup = node.output_ready(formatter=self._formatter)
        else:
            markup = ""

        return collapse_whitespace(markup) if collapse else markup
