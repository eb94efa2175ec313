"""Tunable thresholds for the reflow heuristics.

The ratios and heights are empirical. They are loaded from the environment
so a deployment can retune them without code changes.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class ReflowConfig(BaseModel):
    """Thresholds shared by both reflow strategies.

    Attributes:
        line_tolerance: Max vertical distance between fragments of one line.
        repeat_ratio: Fraction of pages a first/last line must appear on
            to count as a running header/footer (floored).
        heading_dominance_ratio: Fraction of a line's fragments that must
            share its tallest height for the line to be a heading (floored).
        heading_min_height: Tallest fragment must exceed this to be a heading.
        heading_max_length: Paragraphs shorter than this (and unpunctuated)
            are headings in paragraph reflow.
        max_blocks: Per-request block limit of the document database.
    """

    line_tolerance: float = Field(
        default_factory=lambda: float(os.getenv("REFLOW_LINE_TOLERANCE", "2")),
        ge=0.0,
    )
    repeat_ratio: float = Field(
        default_factory=lambda: float(os.getenv("REFLOW_REPEAT_RATIO", "0.7")),
        gt=0.0,
        le=1.0,
    )
    heading_dominance_ratio: float = Field(
        default_factory=lambda: float(os.getenv("REFLOW_HEADING_DOMINANCE", "0.7")),
        ge=0.0,
        le=1.0,
    )
    heading_min_height: float = Field(
        default_factory=lambda: float(os.getenv("REFLOW_HEADING_MIN_HEIGHT", "10")),
        ge=0.0,
    )
    heading_max_length: int = Field(
        default_factory=lambda: int(os.getenv("REFLOW_HEADING_MAX_LENGTH", "100")),
        ge=1,
    )
    max_blocks: int = Field(default=100, ge=1)


def get_reflow_config() -> ReflowConfig:
    """Create reflow configuration from environment."""
    return ReflowConfig()
