"""Tests for block and document models."""

import hashlib
import json

import pytest
from blockdoc.errors import ResourceExhaustedError
from blockdoc.models import (
    VERSION,
    BlockDocument,
    ColumnBlock,
    ColumnData,
    DelimiterBlock,
    HeaderBlock,
    HeaderData,
    ImageBlock,
    ImageData,
    ImageLink,
    LayerBlock,
    ContainerData,
    ParagraphBlock,
    TextData,
    canonical_json,
    coerce_blocks,
    compute_checksum,
    dump_blocks,
)
from pydantic import ValidationError


class TestBlocks:
    """Tests for block models."""

    def test_blocks_are_immutable(self):
        """Test that blocks cannot be modified after creation."""
        block = ParagraphBlock(data=TextData(text="x"))

        with pytest.raises(ValidationError):
            block.data.text = "y"

    def test_header_level_clamped_on_construction(self):
        """Test clamping through the constructor."""
        assert HeaderData(text="x", level=12).level == 6
        assert HeaderData(text="x", level=0).level == 1

    def test_dump_omits_unset_optionals(self):
        """Test exclude-none dumping."""
        block = ImageBlock(data=ImageData(src="/a.jpg", link=ImageLink(href="/")))

        assert dump_blocks([block]) == [{"type": "image", "data": {"src": "/a.jpg", "link": {"href": "/"}}}]

    def test_delimiter_has_no_data(self):
        """Test the delimiter shape."""
        assert dump_blocks([DelimiterBlock()]) == [{"type": "delimiter"}]

    def test_coerce_builds_nested_models(self):
        """Test validation of nested containers."""
        blocks = coerce_blocks(
            [{"type": "layer", "data": {"content": [{"type": "column", "data": {"content": []}}]}}]
        )

        assert isinstance(blocks[0], LayerBlock)
        assert isinstance(blocks[0].data.content[0], ColumnBlock)
        assert blocks[0].data.content[0].data.size is None

    def test_coerce_passes_models_through(self):
        """Test that already-built blocks are kept."""
        block = DelimiterBlock()

        assert coerce_blocks([block]) == [block]

    def test_coerce_rejects_non_sequences(self):
        """Test non-list input."""
        assert coerce_blocks(None) == []
        assert coerce_blocks({"type": "delimiter"}) == []

    def test_coerce_ignores_unhashable_types(self):
        """Test a block whose type is not a string."""
        assert coerce_blocks([{"type": ["paragraph"]}]) == []

    def test_dump_of_deep_tree_is_resource_error(self):
        """Test that trees too deep to serialize raise ResourceExhaustedError."""
        block = ParagraphBlock(data=TextData(text="leaf"))
        for _ in range(300):
            block = LayerBlock(data=ContainerData(content=[block]))

        with pytest.raises(ResourceExhaustedError):
            dump_blocks([block])


class TestChecksum:
    """Tests for canonical encoding and checksums."""

    def test_canonical_json_is_compact_and_sorted(self):
        """Test the canonical encoding."""
        blocks = [HeaderBlock(data=HeaderData(text="Tïtle", level=2))]

        assert canonical_json(blocks) == '[{"data":{"level":2,"text":"Tïtle"},"type":"header"}]'

    def test_checksum_is_sha1_of_canonical_json(self):
        """Test the digest algorithm."""
        blocks = [ParagraphBlock(data=TextData(text="Hello"))]
        expected = hashlib.sha1(canonical_json(blocks).encode("utf-8")).hexdigest()

        assert compute_checksum(blocks) == expected

    def test_checksum_ignores_field_order(self):
        """Test that equal blocks built in different orders hash the same."""
        first = coerce_blocks([{"type": "column", "data": {"size": 4, "content": [], "total": 12}}])
        second = coerce_blocks([{"data": {"total": 12, "content": [], "size": 4}, "type": "column"}])

        assert compute_checksum(first) == compute_checksum(second)

    def test_checksum_changes_with_content(self):
        """Test that content changes alter the checksum."""
        first = [ParagraphBlock(data=TextData(text="a"))]
        second = [ParagraphBlock(data=TextData(text="b"))]

        assert compute_checksum(first) != compute_checksum(second)


class TestBlockDocument:
    """Tests for the document envelope."""

    def test_build(self):
        """Test envelope construction."""
        blocks = [ParagraphBlock(data=TextData(text="Hello"))]
        document = BlockDocument.build(blocks, timestamp=1700000000)

        assert document.version == VERSION
        assert document.time == 1700000000
        assert document.checksum == compute_checksum(blocks)
        assert document.verify()

    def test_to_dict_key_order(self):
        """Test envelope field order."""
        document = BlockDocument.build([], timestamp=1)

        assert list(document.to_dict()) == ["version", "time", "checksum", "blocks"]

    def test_pretty_json(self):
        """Test pretty output."""
        document = BlockDocument.build([DelimiterBlock()], timestamp=1)
        output = document.to_json()

        assert output.startswith('{\n    "version": "0.2"')
        assert json.loads(output)["blocks"] == [{"type": "delimiter"}]

    def test_compact_json(self):
        """Test compact output."""
        document = BlockDocument.build([DelimiterBlock()], timestamp=1)
        output = document.to_json(pretty=False)

        assert "\n" not in output
        assert output.startswith('{"version":"0.2","time":1,')

    def test_verify_detects_tampering(self):
        """Test checksum verification after modification."""
        document = BlockDocument.build([ParagraphBlock(data=TextData(text="a"))], timestamp=1)
        data = document.to_dict()
        data["blocks"][0]["data"]["text"] = "changed"

        assert not BlockDocument.model_validate(data).verify()

    def test_requires_checksum(self):
        """Test that loading an envelope needs its metadata."""
        with pytest.raises(ValidationError):
            BlockDocument.model_validate({"time": 1, "blocks": []})

    def test_column_data_defaults(self):
        """Test the column total default."""
        assert ColumnData().total == 12
        assert ContainerData().content == []
