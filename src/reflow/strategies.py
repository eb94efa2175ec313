"""Strategy selection and the public ``reflow`` entry point."""

from enum import Enum
from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from src.exceptions import ParseFailure
from src.reflow.blocks import Block
from src.reflow.config import ReflowConfig
from src.reflow.geometric import GeometricReflow
from src.reflow.geometry import Fragment
from src.reflow.paragraph import ParagraphReflow

_PAGES_ADAPTER = TypeAdapter(list[list[Fragment]])


class ReflowStrategy(Protocol):
    """Turns one input shape into a block sequence."""

    name: str

    def reflow(self, source: Any) -> list[Block]: ...


class Strategy(str, Enum):
    """Available reflow strategies."""

    PARAGRAPH = "paragraph"
    GEOMETRIC = "geometric"


def get_strategy(strategy: Strategy | str, config: ReflowConfig | None = None) -> ReflowStrategy:
    """Instantiate a strategy by name.

    Raises:
        ParseFailure: If the name is unknown.
    """
    try:
        strategy = Strategy(strategy)
    except ValueError as e:
        raise ParseFailure(f"Unknown reflow strategy: {strategy!r}") from e

    if strategy is Strategy.GEOMETRIC:
        return GeometricReflow(config)
    return ParagraphReflow(config)


def coerce_pages(source: Any) -> list[list[Fragment]]:
    """Validate pages of fragments, accepting plain dicts.

    Raises:
        ParseFailure: If the input is not a list of pages of fragments.
    """
    try:
        return _PAGES_ADAPTER.validate_python(source)
    except ValidationError as e:
        raise ParseFailure(f"Invalid page fragments: {e.error_count()} validation errors") from e


def reflow(
    source: Any,
    strategy: Strategy | str = Strategy.PARAGRAPH,
    config: ReflowConfig | None = None,
) -> list[Block]:
    """Reflow a document into blocks.

    Args:
        source: A string for paragraph reflow, or pages of fragments
            (Fragment instances or dicts with text/y/height) for geometric
            reflow.
        strategy: Strategy name or enum.
        config: Thresholds; loaded from environment if not provided.

    Returns:
        Blocks in reading order.

    Raises:
        ParseFailure: If ``source`` does not match the strategy's input shape.
    """
    impl = get_strategy(strategy, config)
    if isinstance(impl, GeometricReflow):
        return impl.reflow(coerce_pages(source))

    if not isinstance(source, str):
        raise ParseFailure(
            f"Paragraph reflow expects text, got {type(source).__name__}"
        )
    return impl.reflow(source)
