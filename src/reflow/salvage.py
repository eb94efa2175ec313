"""Recover plain text from a text-generation response.

Models asked for a JSON array of blocks answer with fenced JSON, bare JSON
or prose, depending on mood. The response is parsed once into either
``PlainText`` or ``BlockList`` and flattened to text for paragraph reflow.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from src.exceptions import MalformedGenerationResponse
from src.reflow.paragraph import PARAGRAPH_SEPARATOR

logger = logging.getLogger(__name__)

CODE_FENCE = "```"


@dataclass(frozen=True)
class PlainText:
    """Response that is not a JSON block list."""

    text: str


@dataclass(frozen=True)
class BlockList:
    """Response that decoded to a list of block-like objects."""

    items: list[Any]


ParsedResponse = PlainText | BlockList


def strip_code_fences(raw: str) -> str:
    """Drop Markdown code-fence lines such as ```json and ```."""
    lines = [line for line in raw.splitlines() if not line.strip().startswith(CODE_FENCE)]
    return "\n".join(lines).strip()


def parse_generation_response(raw: str) -> ParsedResponse:
    """Classify a raw model response.

    A JSON array, or an object holding a ``blocks`` array, is a BlockList.
    Anything else is PlainText holding the raw string unchanged.
    """
    try:
        parsed = json.loads(strip_code_fences(raw))
    except (json.JSONDecodeError, RecursionError):
        return PlainText(raw)

    if isinstance(parsed, list):
        return BlockList(parsed)
    if isinstance(parsed, dict) and isinstance(parsed.get("blocks"), list):
        return BlockList(parsed["blocks"])
    return PlainText(raw)


def _rich_text_content(rich_text: Any) -> str:
    if not isinstance(rich_text, list):
        return ""
    parts = []
    for run in rich_text:
        if not isinstance(run, dict):
            continue
        text = run.get("text")
        if isinstance(text, dict) and isinstance(text.get("content"), str):
            parts.append(text["content"])
        elif isinstance(run.get("plain_text"), str):
            parts.append(run["plain_text"])
    return "".join(parts)


def item_text(item: Any) -> str:
    """Best-effort text of one block-like object.

    Looks at the rich text of the typed container first (``item[item.type]``),
    then any nested container with rich text, then a flat ``text`` string.
    """
    if isinstance(item, str):
        return item.strip()
    if not isinstance(item, dict):
        return ""

    block_type = item.get("type")
    containers = []
    if isinstance(block_type, str) and isinstance(item.get(block_type), dict):
        containers.append(item[block_type])
    containers.extend(v for v in item.values() if isinstance(v, dict))
    containers.append(item)

    for container in containers:
        text = _rich_text_content(container.get("rich_text"))
        if text.strip():
            return text.strip()

    if isinstance(item.get("text"), str):
        return item["text"].strip()
    return ""


def flatten_blocks(items: list[Any]) -> str:
    """Join the text of block-like objects with blank lines.

    Raises:
        MalformedGenerationResponse: If no item yields any text.
    """
    texts = [text for text in (item_text(item) for item in items) if text]
    if not texts:
        raise MalformedGenerationResponse(f"No text in {len(items)} generated blocks")
    return PARAGRAPH_SEPARATOR.join(texts)


def salvage_text(raw: str) -> str:
    """Reduce a generation response to plain text for paragraph reflow.

    Falls back to the raw response when it is not a block list or when the
    block list holds no text.
    """
    parsed = parse_generation_response(raw)
    if isinstance(parsed, PlainText):
        return parsed.text

    try:
        return flatten_blocks(parsed.items)
    except MalformedGenerationResponse as e:
        logger.warning(f"Using raw generation response: {e}")
        return raw
