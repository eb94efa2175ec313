"""Text-to-block reflow heuristics.

Turns unstructured document text into ordered, typed blocks.

Strategies:
    - paragraph: blank-line paragraphs classified by length, punctuation
      and bullet markers
    - geometric: positioned fragments grouped into lines, running
      headers/footers lifted out, headings found by font-size dominance

Pure functions over in-memory values. No I/O.
"""

from src.reflow.blocks import Block, BlockSequence, BlockType
from src.reflow.config import ReflowConfig, get_reflow_config
from src.reflow.geometric import GeometricReflow, GeometricReflowResult
from src.reflow.geometry import Fragment, Line, group_lines
from src.reflow.paragraph import ParagraphReflow, render_text
from src.reflow.salvage import salvage_text
from src.reflow.strategies import ReflowStrategy, Strategy, get_strategy, reflow

__all__ = [
    "Block",
    "BlockSequence",
    "BlockType",
    "Fragment",
    "GeometricReflow",
    "GeometricReflowResult",
    "Line",
    "ParagraphReflow",
    "ReflowConfig",
    "ReflowStrategy",
    "Strategy",
    "get_reflow_config",
    "get_strategy",
    "group_lines",
    "reflow",
    "render_text",
    "salvage_text",
]
