"""Positioned fragments and their grouping into lines."""

from pydantic import BaseModel, ConfigDict, Field


class Fragment(BaseModel):
    """A run of text at a vertical position on a page.

    Attributes:
        text: The run's characters.
        y: Vertical coordinate. Only differences between fragments matter,
            so the origin and direction are whatever the extractor uses.
        height: Rendered height, a proxy for font size.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    y: float
    height: float = Field(ge=0.0)


class Line(BaseModel):
    """Consecutive fragments sharing (almost) the same vertical position."""

    model_config = ConfigDict(frozen=True)

    fragments: tuple[Fragment, ...]

    @property
    def text(self) -> str:
        return " ".join(f.text for f in self.fragments).strip()

    @property
    def max_height(self) -> float:
        return max((f.height for f in self.fragments), default=0.0)


def group_lines(fragments: list[Fragment], tolerance: float = 2.0) -> list[Line]:
    """Group one page's fragments into lines.

    A new line starts whenever a fragment's y differs from the previous
    fragment's y by more than ``tolerance``. Fragments must already be in
    reading order.

    Args:
        fragments: Fragments of a single page.
        tolerance: Max vertical drift within a line.

    Returns:
        Lines in reading order.
    """
    lines: list[Line] = []
    current: list[Fragment] = []
    previous_y: float | None = None

    for fragment in fragments:
        if current and previous_y is not None and abs(fragment.y - previous_y) > tolerance:
            lines.append(Line(fragments=tuple(current)))
            current = []
        current.append(fragment)
        previous_y = fragment.y

    if current:
        lines.append(Line(fragments=tuple(current)))
    return lines


def page_line_index(pages: list[list[Line]]) -> tuple[list[str], list[str]]:
    """Collect first and last line texts per page.

    Pages without lines contribute nothing.

    Returns:
        (header candidates, footer candidates) in page order.
    """
    firsts: list[str] = []
    lasts: list[str] = []
    for lines in pages:
        if not lines:
            continue
        firsts.append(lines[0].text)
        lasts.append(lines[-1].text)
    return firsts, lasts
