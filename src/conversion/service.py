"""End-to-end PDF to Notion conversion.

Runs one sequential chain per request: extract, optionally structure with
the model, reflow, build the payload, optionally publish. Each step is
awaited before the next; any failure aborts the chain.
"""

import logging
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, Field

from src.agent.structuring_agent import StructuringService
from src.parsing.pdf_parser import extract_fragments, parse_pdf
from src.publishing.notion import NotionPublisher
from src.publishing.payload import PublishRequest, to_publish_payload
from src.reflow.blocks import Block
from src.reflow.config import ReflowConfig, get_reflow_config
from src.reflow.geometric import GeometricReflow
from src.reflow.paragraph import ParagraphReflow
from src.reflow.salvage import salvage_text
from src.reflow.strategies import Strategy

logger = logging.getLogger(__name__)


class ConversionResult(BaseModel):
    """Outcome of one conversion.

    Attributes:
        title: Page title used.
        strategy: Reflow strategy applied.
        pages: Pages in the source PDF.
        blocks: All blocks, before truncation.
        headers: Running headers found (geometric reflow only).
        footers: Running footers found (geometric reflow only).
        payload: Page payload sent (or ready to send) to Notion.
        notion_page: Notion's response when published.
    """

    title: str
    strategy: Strategy
    pages: int = Field(ge=0)
    blocks: list[Block] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)
    footers: list[str] = Field(default_factory=list)
    payload: PublishRequest
    notion_page: dict[str, Any] | None = None


def resolve_title(title: str | None, metadata_title: str | None, filename: str | None) -> str:
    """Pick the page title: explicit, then PDF metadata, then file stem."""
    for candidate in (title, metadata_title):
        if candidate and candidate.strip():
            return candidate.strip()
    if filename:
        return PurePath(filename).stem or "Untitled"
    return "Untitled"


class ConversionService:
    """Orchestrates extraction, structuring, reflow and publishing."""

    def __init__(
        self,
        structuring: StructuringService | None = None,
        publisher: NotionPublisher | None = None,
        config: ReflowConfig | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            structuring: Model service; required only when ``use_ai`` is set.
            publisher: Notion publisher; required only when ``publish`` is set.
            config: Reflow thresholds; loaded from environment if not provided.
        """
        self._structuring = structuring
        self._publisher = publisher
        self._config = config or get_reflow_config()

    async def convert(
        self,
        content: bytes,
        filename: str | None = None,
        title: str | None = None,
        strategy: Strategy = Strategy.PARAGRAPH,
        use_ai: bool = False,
        publish: bool = True,
    ) -> ConversionResult:
        """Convert PDF bytes to blocks and optionally publish them.

        ``use_ai`` only applies to paragraph reflow; geometric reflow needs
        page positions the model cannot return.

        Raises:
            ExtractionFailed: If the PDF cannot be read.
            GenerationUnavailable: If structuring is requested and fails.
            PublishRejected: If Notion refuses the page.
        """
        strategy = Strategy(strategy)
        pdf_content = parse_pdf(content)
        page_title = resolve_title(title, pdf_content.title, filename)
        headers: list[str] = []
        footers: list[str] = []

        if strategy is Strategy.GEOMETRIC:
            result = GeometricReflow(self._config).analyze(extract_fragments(content))
            blocks = result.blocks
            headers, footers = result.headers, result.footers
        else:
            text = pdf_content.text
            if use_ai:
                if self._structuring is None:
                    raise ValueError("AI structuring requested without a structuring service")
                text = salvage_text(await self._structuring.structure(text))
            blocks = ParagraphReflow(self._config).reflow(text)

        payload = to_publish_payload(blocks, page_title, self._config.max_blocks)
        logger.info(
            f"Converted '{page_title}' with {strategy.value} reflow: "
            f"{len(blocks)} blocks, {len(payload.children)} in payload"
        )

        notion_page = None
        if publish:
            if self._publisher is None:
                raise ValueError("Publishing requested without a Notion publisher")
            notion_page = await self._publisher.publish(payload)

        return ConversionResult(
            title=page_title,
            strategy=strategy,
            pages=pdf_content.pages,
            blocks=blocks,
            headers=headers,
            footers=footers,
            payload=payload,
            notion_page=notion_page,
        )
