"""Tests for inner-markup extraction."""

from bs4 import BeautifulSoup
from blockdoc.conversion import FragmentExtractor, collapse_whitespace


def _first(html: str, name: str):
    return BeautifulSoup(html, "html.parser").find(name)


class TestCollapseWhitespace:
    """Tests for collapse_whitespace."""

    def test_collapses_runs_of_spaces(self):
        """Test that runs of spaces become one space."""
        assert collapse_whitespace("a   b") == "a b"

    def test_removes_line_breaks_with_following_indent(self):
        """Test that a newline and the whitespace after it disappear."""
        assert collapse_whitespace("a\n      b") == "ab"
        assert collapse_whitespace("a\t\tb") == "ab"

    def test_trims_outer_whitespace(self):
        """Test outer trimming."""
        assert collapse_whitespace("   padded   ") == "padded"

    def test_keeps_non_breaking_spaces(self):
        """Test that non-breaking spaces are content, not whitespace."""
        assert collapse_whitespace("a\u00a0\u00a0b") == "a\u00a0\u00a0b"
        assert collapse_whitespace(" \u00a0x\u00a0\n") == "\u00a0x\u00a0"


class TestFragmentExtractor:
    """Tests for FragmentExtractor."""

    def test_excludes_own_tag(self):
        """Test that the node's own tag is not part of the result."""
        extractor = FragmentExtractor()
        node = _first("<p>Hello <b>World</b></p>", "p")

        assert extractor.extract(node) == "Hello <b>World</b>"

    def test_keeps_nested_same_named_tags(self):
        """Test that nested elements with the parent's tag name survive."""
        extractor = FragmentExtractor()
        node = _first('<div class="outer"><div>inner</div><div>second</div></div>', "div")

        assert extractor.extract(node) == "<div>inner</div><div>second</div>"

    def test_escapes_text(self):
        """Test that entities are re-escaped on output."""
        extractor = FragmentExtractor()
        node = _first("<p>a &amp; b &lt; c</p>", "p")

        assert extractor.extract(node) == "a &amp; b &lt; c"

    def test_preserves_whitespace_when_not_collapsing(self):
        """Test verbatim whitespace mode."""
        extractor = FragmentExtractor()
        node = _first("<pre>\n  line one\n    line two\n</pre>", "pre")

        assert extractor.extract(node, collapse=False) == "\n  line one\n    line two\n"

    def test_collapses_whitespace_by_default(self):
        """Test default whitespace normalization."""
        extractor = FragmentExtractor()
        node = _first("<p>\n    Some   text\n</p>", "p")

        assert extractor.extract(node) == "Some text"

    def test_text_node(self):
        """Test extraction from a bare text node."""
        extractor = FragmentExtractor()
        text = _first("<p>  x &gt; y  </p>", "p").contents[0]

        assert extractor.extract(text) == "x &gt; y"

    def test_empty_element(self):
        """Test an element without children."""
        extractor = FragmentExtractor()
        node = _first("<p></p>", "p")

        assert extractor.extract(node) == ""
