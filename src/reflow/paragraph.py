"""Paragraph reflow: classify blank-line separated paragraphs of flat text."""

import logging

from src.reflow.blocks import BULLET_MARKERS, Block, BlockType
from src.reflow.config import ReflowConfig, get_reflow_config

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, dropping whitespace-only segments.

    Args:
        text: Flat text, e.g. extracted PDF text or a model response.

    Returns:
        Trimmed paragraphs in reading order.
    """
    normalized = text.replace("\r\n", "\n")
    return [part.strip() for part in normalized.split(PARAGRAPH_SEPARATOR) if part.strip()]


def classify_paragraph(paragraph: str, config: ReflowConfig | None = None) -> Block:
    """Classify one trimmed paragraph.

    The heading test runs first, so a short unpunctuated bullet line
    becomes a heading.

    Args:
        paragraph: Non-empty paragraph text.
        config: Thresholds; loaded from environment if not provided.

    Returns:
        The classified Block.
    """
    config = config or get_reflow_config()
    text = paragraph.strip()

    if len(text) < config.heading_max_length and not text.endswith("."):
        return Block(type=BlockType.HEADING, text=text)

    if text.startswith(BULLET_MARKERS):
        item = text[1:].lstrip()
        if item:
            return Block(type=BlockType.BULLET_ITEM, text=item)

    return Block(type=BlockType.PARAGRAPH, text=text)


class ParagraphReflow:
    """Reflow strategy over a single flat text string."""

    name = "paragraph"

    def __init__(self, config: ReflowConfig | None = None) -> None:
        self._config = config or get_reflow_config()

    def reflow(self, text: str) -> list[Block]:
        """Turn flat text into blocks. Empty input yields no blocks."""
        blocks = [classify_paragraph(p, self._config) for p in split_paragraphs(text)]
        logger.debug(f"Paragraph reflow produced {len(blocks)} blocks")
        return blocks


def render_text(blocks: list[Block]) -> str:
    """Render blocks back to blank-line separated text.

    Bullet items get their marker back so the output reflows to the same
    block types.
    """
    parts = []
    for block in blocks:
        if block.type == BlockType.BULLET_ITEM:
            parts.append(f"{BULLET_MARKERS[0]} {block.text}")
        else:
            parts.append(block.text)
    return PARAGRAPH_SEPARATOR.join(parts)
