"""Detection of running headers and footers repeated across pages."""

import math
from collections import Counter


def repeat_threshold(page_count: int, ratio: float) -> int:
    """Minimum number of pages a line must recur on (floored)."""
    return math.floor(page_count * ratio)


def find_repeated(candidates: list[str], page_count: int, ratio: float = 0.7) -> list[str]:
    """Return candidate texts that recur on enough pages.

    Results keep first-seen order, so the first entry is the earliest
    qualifying header or footer in the document.

    Args:
        candidates: First-line (or last-line) texts, one per page with lines.
        page_count: Total pages in the document.
        ratio: Fraction of ``page_count`` a text must reach.

    Returns:
        Qualifying texts, each listed once.
    """
    threshold = repeat_threshold(page_count, ratio)
    counts = Counter(text for text in candidates if text)
    return [text for text, count in counts.items() if count >= threshold]
