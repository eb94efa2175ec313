"""Mapping of blocks to Notion page payloads.

Notion accepts at most 100 children per page-create request. Blocks past
the limit are dropped. Each block carries one text run, and Notion rejects
runs longer than 2000 characters; such blocks are sent as they are and
logged, so the rejection surfaces as PublishRejected.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field

from src.reflow.blocks import Block, BlockType

logger = logging.getLogger(__name__)

MAX_BLOCKS_PER_REQUEST = 100
MAX_TEXT_RUN_LENGTH = 2000

_NOTION_TYPES: dict[BlockType, str] = {
    BlockType.HEADING: "heading_2",
    BlockType.BULLET_ITEM: "bulleted_list_item",
    BlockType.NUMBERED_ITEM: "numbered_list_item",
    BlockType.PARAGRAPH: "paragraph",
}

# Notion-native names accepted from API clients
_BLOCK_TYPE_ALIASES: dict[str, BlockType] = {
    "heading_1": BlockType.HEADING,
    "heading_2": BlockType.HEADING,
    "heading_3": BlockType.HEADING,
    "bulleted_list_item": BlockType.BULLET_ITEM,
    "numbered_list_item": BlockType.NUMBERED_ITEM,
    "paragraph": BlockType.PARAGRAPH,
}


class PublishRequest(BaseModel):
    """Page properties and children ready for the Notion pages endpoint.

    Attributes:
        title: Page title.
        properties: Notion page properties (the ``Name`` title column).
        children: Notion block objects, at most 100.
        dropped: Number of blocks cut by the per-request limit.
    """

    title: str
    properties: dict[str, Any]
    children: list[dict[str, Any]] = Field(max_length=MAX_BLOCKS_PER_REQUEST)
    dropped: int = Field(default=0, ge=0)

    def to_notion_body(self, database_id: str) -> dict[str, Any]:
        """Build the JSON body for ``POST /v1/pages``."""
        return {
            "parent": {"database_id": database_id},
            "properties": self.properties,
            "children": self.children,
        }


def coerce_block_type(value: str) -> BlockType:
    """Resolve a block type from our enum values or Notion type names.

    Unknown names become paragraphs.
    """
    if value in _BLOCK_TYPE_ALIASES:
        return _BLOCK_TYPE_ALIASES[value]
    try:
        return BlockType(value)
    except ValueError:
        return BlockType.PARAGRAPH


def _rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def to_notion_block(block: Block) -> dict[str, Any]:
    """Convert one block to a Notion block object with a single text run."""
    notion_type = _NOTION_TYPES.get(block.type, "paragraph")
    if len(block.text) > MAX_TEXT_RUN_LENGTH:
        logger.warning(
            f"{notion_type} block has {len(block.text)} characters; "
            f"Notion rejects text runs over {MAX_TEXT_RUN_LENGTH}"
        )
    return {
        "object": "block",
        "type": notion_type,
        notion_type: {"rich_text": _rich_text(block.text)},
    }


def to_publish_payload(
    blocks: list[Block],
    title: str,
    max_blocks: int = MAX_BLOCKS_PER_REQUEST,
) -> PublishRequest:
    """Build a page payload from blocks, keeping only the first ``max_blocks``.

    Args:
        blocks: Blocks in reading order.
        title: Page title.
        max_blocks: Children limit, capped at the API's 100.

    Returns:
        PublishRequest; never raises on long input.
    """
    limit = min(max_blocks, MAX_BLOCKS_PER_REQUEST)
    kept = blocks[:limit]
    dropped = len(blocks) - len(kept)
    if dropped:
        logger.info(f"Dropping {dropped} blocks past the {limit}-block request limit")

    return PublishRequest(
        title=title,
        properties={"Name": {"title": [{"text": {"content": title}}]}},
        children=[to_notion_block(block) for block in kept],
        dropped=dropped,
    )
