from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.reflow.blocks import Block
from src.reflow.strategies import Strategy


class PDFUploadResponse(BaseModel):
    """Response after PDF upload processing.

    Attributes:
        filename: Name of the uploaded file.
        pages: Number of pages in the document.
        text: Extracted, cleaned text.
        title: Title from PDF metadata, if any.
        metadata: Document metadata (author, producer, ...).
        success: Whether the upload was successful.
        error: Error message if upload failed.
    """

    filename: str
    pages: int
    text: str = ""
    title: str | None = None
    metadata: dict[str, str | None] = Field(default_factory=dict)
    success: bool
    error: str | None = None


class ReflowRequest(BaseModel):
    """Request payload for the reflow endpoint.

    Attributes:
        source: Text for paragraph reflow, or pages of
            ``{"text", "y", "height"}`` fragments for geometric reflow.
        strategy: Reflow strategy name.
    """

    source: Any
    strategy: Strategy = Strategy.PARAGRAPH


class ReflowResponse(BaseModel):
    """Blocks produced by a reflow.

    Attributes:
        strategy: Strategy applied.
        blocks: Blocks in reading order.
        headers: Running headers found (geometric reflow only).
        footers: Running footers found (geometric reflow only).
        pages: Pages examined, when known.
    """

    strategy: Strategy
    blocks: list[Block]
    headers: list[str] = Field(default_factory=list)
    footers: list[str] = Field(default_factory=list)
    pages: int | None = None


class StructureRequest(BaseModel):
    """Text to restructure with the model."""

    text: str = Field(..., min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace from text before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class StructureResponse(BaseModel):
    """Model output after salvage and paragraph reflow.

    Attributes:
        text: Plain text recovered from the response.
        blocks: Paragraph reflow of ``text``.
        raw: Response exactly as the model returned it.
    """

    text: str
    blocks: list[Block]
    raw: str


class BlockIn(BaseModel):
    """A block sent by a client for publishing.

    ``type`` accepts our block type values or Notion type names such as
    ``heading_2`` and ``bulleted_list_item``; anything else is a paragraph.
    """

    type: str = "paragraph"
    text: str = Field(..., min_length=1)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace so blank text fails the length check."""
        if isinstance(v, str):
            return v.strip()
        return v


class PublishBlocksRequest(BaseModel):
    """Request payload for publishing blocks as a Notion page."""

    title: str = Field(..., min_length=1)
    blocks: list[BlockIn] = Field(..., min_length=1)


class PublishResponse(BaseModel):
    """Result of a publish request.

    Attributes:
        message: Human-readable status.
        blocks_sent: Children included in the page.
        blocks_dropped: Blocks cut by the 100-children limit.
        notion_response: Notion's page object.
    """

    message: str
    blocks_sent: int
    blocks_dropped: int = 0
    notion_response: dict[str, Any]
