"""
Typed block models.

Every block type is a frozen pydantic model carrying a ``type`` literal and a
typed ``data`` payload. ``Block`` is the discriminated union of all of them,
so validation picks the right model from the ``type`` field alone.
"""

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticSerializationError

from ..errors import ResourceExhaustedError

logger = logging.getLogger(__name__)

COLUMNS_COUNT = 12
MIN_HEADER_LEVEL = 1
MAX_HEADER_LEVEL = 6


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# Raw markup; JSON null reads as empty
Text = Annotated[str, BeforeValidator(_none_to_empty)]


class BlockData(BaseModel):
    """Base for block payloads."""

    model_config = {"frozen": True}


class TextData(BlockData):
    """Payload of ``paragraph`` and ``code`` blocks."""

    text: Text = ""


class HeaderData(BlockData):
    """Payload of ``header`` blocks; ``level`` is clamped to 1..6."""

    text: Text = ""
    level: int = MIN_HEADER_LEVEL

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, value: Any) -> Any:
        return MIN_HEADER_LEVEL if value is None else value

    @field_validator("level")
    @classmethod
    def _clamp_level(cls, value: int) -> int:
        return max(MIN_HEADER_LEVEL, min(MAX_HEADER_LEVEL, value))


class QuoteData(BlockData):
    """Payload of ``quote`` blocks."""

    content: list[Text] = Field(default_factory=list)
    cite: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        if value is None:
            return []
        # Older documents stored sparse quote lists as {"0": ..., "2": ...}
        if isinstance(value, Mapping):
            return list(value.values())
        return value


class ContainerData(BlockData):
    """Payload of ``layer`` and ``columns`` blocks."""

    content: list["Block"] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def _drop_unusable(cls, value: Any) -> Any:
        return coerce_blocks(value)


class ColumnData(ContainerData):
    """Payload of ``column`` blocks."""

    size: Optional[int] = None
    total: int = COLUMNS_COUNT


class EmbedData(BlockData):
    """Payload of ``embed`` blocks: raw figure markup."""

    content: Text = ""


class ImageLink(BlockData):
    href: Optional[str] = None
    target: Optional[str] = None


class ImageData(BlockData):
    """Payload of ``image`` blocks."""

    src: Optional[str] = None
    alt: Optional[str] = None
    id: Optional[str] = None
    caption: Optional[str] = None
    link: Optional[ImageLink] = None


class _DataBlock(BaseModel):
    model_config = {"frozen": True}

    @field_validator("data", mode="before", check_fields=False)
    @classmethod
    def _default_data(cls, value: Any) -> Any:
        return {} if value is None else value


class ParagraphBlock(_DataBlock):
    type: Literal["paragraph"] = "paragraph"
    data: TextData = Field(default_factory=TextData)


class DelimiterBlock(BaseModel):
    type: Literal["delimiter"] = "delimiter"

    model_config = {"frozen": True}


class CodeBlock(_DataBlock):
    type: Literal["code"] = "code"
    data: TextData = Field(default_factory=TextData)


class HeaderBlock(_DataBlock):
    type: Literal["header"] = "header"
    data: HeaderData = Field(default_factory=HeaderData)


class QuoteBlock(_DataBlock):
    type: Literal["quote"] = "quote"
    data: QuoteData = Field(default_factory=QuoteData)


class LayerBlock(_DataBlock):
    type: Literal["layer"] = "layer"
    data: ContainerData = Field(default_factory=ContainerData)


class ColumnsBlock(_DataBlock):
    type: Literal["columns"] = "columns"
    data: ContainerData = Field(default_factory=ContainerData)


class ColumnBlock(_DataBlock):
    type: Literal["column"] = "column"
    data: ColumnData = Field(default_factory=ColumnData)


class EmbedBlock(_DataBlock):
    type: Literal["embed"] = "embed"
    data: EmbedData = Field(default_factory=EmbedData)


class ImageBlock(_DataBlock):
    type: Literal["image"] = "image"
    data: ImageData = Field(default_factory=ImageData)


Block = Annotated[
    Union[
        ParagraphBlock,
        DelimiterBlock,
        CodeBlock,
        HeaderBlock,
        QuoteBlock,
        LayerBlock,
        ColumnsBlock,
        ColumnBlock,
        EmbedBlock,
        ImageBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_CLASSES = (
    ParagraphBlock,
    DelimiterBlock,
    CodeBlock,
    HeaderBlock,
    QuoteBlock,
    LayerBlock,
    ColumnsBlock,
    ColumnBlock,
    EmbedBlock,
    ImageBlock,
)

for _model in (ContainerData, ColumnData, LayerBlock, ColumnsBlock, ColumnBlock):
    _model.model_rebuild()

BLOCK_TYPES = frozenset(cls.model_fields["type"].default for cls in BLOCK_CLASSES)

_block_adapter = TypeAdapter(Block)


def coerce_blocks(items: Any) -> list[Block]:
    """
    Validate a raw block sequence, dropping what cannot be rendered.

    Entries with an unknown or missing ``type`` are skipped silently so newer
    documents degrade gracefully. Entries of a known type whose payload fails
    validation are skipped with a warning.

    Args:
        items: Sequence of block mappings or block models

    Returns:
        List of validated blocks (empty if ``items`` is not a sequence)
    """
    if not isinstance(items, (list, tuple)):
        return []

    blocks: list[Block] = []
    for item in items:
        if isinstance(item, BLOCK_CLASSES):
            blocks.append(item)
            continue

        block_type = item.get("type") if isinstance(item, Mapping) else None
        if not isinstance(block_type, str) or block_type not in BLOCK_TYPES:
            logger.debug(f"Skipping block of unknown type: {block_type!r}")
            continue

        try:
            blocks.append(_block_adapter.validate_python(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {block_type} block ({e.error_count()} validation errors)")

    return blocks


def dump_blocks(blocks: list[Block]) -> list[dict[str, Any]]:
    """
    Dump blocks to plain JSON-ready dicts, omitting unset optional fields.

    Raises:
        ResourceExhaustedError: If the tree is nested deeper than the
            serializer can follow
    """
    try:
        return [block.model_dump(exclude_none=True, warnings="error") for block in blocks]
    except (PydanticSerializationError, ValueError, RecursionError) as e:
        raise ResourceExhaustedError(f"Could not dump blocks: {type(e).__name__}") from e
