"""Typed content blocks produced by the reflow strategies."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

BULLET_MARKERS = ("•", "-")


class BlockType(str, Enum):
    """Kinds of content block."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLET_ITEM = "bullet_item"
    NUMBERED_ITEM = "numbered_item"


class Block(BaseModel):
    """One unit of structured content.

    Blocks are frozen once built. Position in the surrounding list is the
    only identity a block has.

    Attributes:
        type: Block kind.
        text: Trimmed, non-empty content. Bullet markers are already removed.
    """

    model_config = ConfigDict(frozen=True)

    type: BlockType
    text: str

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Trim surrounding whitespace and reject empty text."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Block text must not be empty")
        return v


BlockSequence = list[Block]
