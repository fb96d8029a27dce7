"""The versioned, checksummed envelope around a block sequence."""

import hashlib
import json
import time
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..errors import ResourceExhaustedError
from .blocks import Block, coerce_blocks, dump_blocks

VERSION = "0.2"


def _encode(data: Any, **options: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, **options)
    except (TypeError, ValueError, RecursionError) as e:
        raise ResourceExhaustedError(f"Could not encode block document: {type(e).__name__}") from e


def canonical_json(blocks: list[Block]) -> str:
    """Encode blocks deterministically: sorted keys, no insignificant whitespace."""
    return _encode(dump_blocks(blocks), sort_keys=True, separators=(",", ":"))


def compute_checksum(blocks: list[Block]) -> str:
    """Return the SHA-1 hex digest of the canonical encoding of ``blocks``."""
    return hashlib.sha1(canonical_json(blocks).encode("utf-8")).hexdigest()


class BlockDocument(BaseModel):
    """
    Envelope produced by HTML serialization.

    The checksum covers only ``blocks``; ``version`` and ``time`` are attached
    afterwards and do not affect it.

    Example:
        document = BlockDocument.build([ParagraphBlock(data=TextData(text="Hello"))])
        payload = document.to_json(pretty=False)
    """

    version: str = Field(VERSION, description="Schema version of the block format")
    time: int = Field(..., description="Creation time, seconds since the epoch")
    checksum: str = Field(..., description="SHA-1 hex digest of the canonical block encoding")
    blocks: list[Block] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("blocks", mode="before")
    @classmethod
    def _drop_unusable(cls, value: Any) -> Any:
        return coerce_blocks(value)

    @classmethod
    def build(cls, blocks: list[Block], timestamp: Optional[int] = None) -> "BlockDocument":
        """
        Wrap blocks in an envelope.

        Args:
            blocks: Block sequence to wrap
            timestamp: Creation time (defaults to now)

        Returns:
            New document with the checksum computed over ``blocks``
        """
        return cls(
            time=int(time.time()) if timestamp is None else timestamp,
            checksum=compute_checksum(blocks),
            blocks=blocks,
        )

    def verify(self) -> bool:
        """Check the stored checksum against the blocks."""
        return compute_checksum(self.blocks) == self.checksum

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "time": self.time,
            "checksum": self.checksum,
            "blocks": dump_blocks(self.blocks),
        }

    def to_json(self, pretty: bool = True, indent: int = 4) -> str:
        """
        Serialize the envelope.

        Args:
            pretty: Indent the output; otherwise emit compact JSON
            indent: Indentation width for pretty output

        Returns:
            JSON string

        Raises:
            ResourceExhaustedError: If the blocks are nested too deeply to encode
        """
        if pretty:
            return _encode(self.to_dict(), indent=indent)
        return _encode(self.to_dict(), separators=(",", ":"))
