"""Notion publisher configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class NotionConfig(BaseModel):
    """Credentials and target for the Notion publisher.

    Attributes:
        api_key: Notion integration token.
        database_id: Database the pages are created in.
        api_url: Notion API base URL.
        notion_version: Value of the Notion-Version header.
        timeout: Request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("NOTION_API_KEY", ""),
        description="Notion integration token",
    )
    database_id: str = Field(
        default_factory=lambda: os.getenv("NOTION_DATABASE_ID", ""),
        description="Target database ID",
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv("NOTION_API_URL", "https://api.notion.com/v1"),
    )
    notion_version: str = Field(
        default_factory=lambda: os.getenv("NOTION_VERSION", "2022-06-28"),
    )
    timeout: float = Field(default=30.0, gt=0.0)

    @field_validator("api_key", "database_id")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Validate that credentials are present and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "Notion credentials required. Set NOTION_API_KEY and NOTION_DATABASE_ID in .env"
            )
        return v.strip()


def get_notion_config() -> NotionConfig:
    """Create Notion configuration from environment.

    Raises:
        ValueError: If the token or database ID is missing.
    """
    return NotionConfig()
