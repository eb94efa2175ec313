"""Geometric reflow: lines, running furniture and font-size headings.

Works on per-page fragments carrying a vertical position and a rendered
height. Lines that repeat at the top or bottom of most pages are lifted out
of the body and emitted once; remaining lines become headings when their
tallest glyphs dominate the line.
"""

import logging
import math

from pydantic import BaseModel, Field

from src.reflow.blocks import Block, BlockType
from src.reflow.config import ReflowConfig, get_reflow_config
from src.reflow.furniture import find_repeated
from src.reflow.geometry import Fragment, Line, group_lines, page_line_index

logger = logging.getLogger(__name__)


class GeometricReflowResult(BaseModel):
    """Blocks plus the page furniture found while building them.

    Attributes:
        blocks: Blocks in reading order, furniture included once.
        headers: Repeated first-line texts, first-seen order.
        footers: Repeated last-line texts, first-seen order.
        page_count: Number of pages examined.
    """

    blocks: list[Block] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)
    footers: list[str] = Field(default_factory=list)
    page_count: int = Field(default=0, ge=0)


def is_heading_line(line: Line, config: ReflowConfig) -> bool:
    """Check whether a line's tallest glyphs dominate it.

    Args:
        line: Grouped line.
        config: Supplies the dominance ratio and minimum height.

    Returns:
        True when enough fragments share the tallest height and that
        height exceeds the minimum.
    """
    if not line.fragments:
        return False
    tallest = line.max_height
    at_tallest = sum(1 for f in line.fragments if f.height == tallest)
    required = math.floor(len(line.fragments) * config.heading_dominance_ratio)
    return at_tallest >= required and tallest > config.heading_min_height


class GeometricReflow:
    """Reflow strategy over pages of positioned fragments."""

    name = "geometric"

    def __init__(self, config: ReflowConfig | None = None) -> None:
        self._config = config or get_reflow_config()

    def analyze(self, pages: list[list[Fragment]]) -> GeometricReflowResult:
        """Build blocks and furniture metadata for a whole document."""
        page_lines = [group_lines(fragments, self._config.line_tolerance) for fragments in pages]
        page_count = len(pages)

        firsts, lasts = page_line_index(page_lines)
        headers = find_repeated(firsts, page_count, self._config.repeat_ratio)
        footers = find_repeated(lasts, page_count, self._config.repeat_ratio)
        furniture = set(headers) | set(footers)

        blocks: list[Block] = []
        if headers:
            blocks.append(Block(type=BlockType.PARAGRAPH, text=headers[0]))

        for lines in page_lines:
            for line in lines:
                text = line.text
                if not text or text in furniture:
                    continue
                block_type = (
                    BlockType.HEADING if is_heading_line(line, self._config) else BlockType.PARAGRAPH
                )
                blocks.append(Block(type=block_type, text=text))

        if footers:
            blocks.append(Block(type=BlockType.PARAGRAPH, text=footers[0]))

        logger.info(
            f"Geometric reflow: {page_count} pages, {len(blocks)} blocks, "
            f"{len(headers)} running headers, {len(footers)} running footers"
        )
        return GeometricReflowResult(
            blocks=blocks,
            headers=headers,
            footers=footers,
            page_count=page_count,
        )

    def reflow(self, pages: list[list[Fragment]]) -> list[Block]:
        """Turn pages of fragments into blocks."""
        return self.analyze(pages).blocks
