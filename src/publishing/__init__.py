"""Publishing of block sequences as Notion pages.

Responsibilities:
    - Block → Notion block object mapping
    - Truncation to the 100-children request limit
    - Page creation over the Notion REST API with httpx

Credentials are passed in through NotionConfig, never read ad hoc.
"""

from src.publishing.config import NotionConfig, get_notion_config
from src.publishing.notion import NotionPublisher, get_notion_publisher
from src.publishing.payload import (
    MAX_BLOCKS_PER_REQUEST,
    PublishRequest,
    coerce_block_type,
    to_notion_block,
    to_publish_payload,
)

__all__ = [
    "MAX_BLOCKS_PER_REQUEST",
    "NotionConfig",
    "NotionPublisher",
    "PublishRequest",
    "coerce_block_type",
    "get_notion_config",
    "get_notion_publisher",
    "to_notion_block",
    "to_publish_payload",
]
