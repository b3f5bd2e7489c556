"""Inter-word space redistribution for justified body lines."""

from __future__ import annotations

from typing import List, Sequence

from ..models import WrappedLine
from .pdf_surface import TextSurface
from .pdf_wrap import Measure


def justified_positions(
    *, words: Sequence[str], x: float, target_width: float, measure: Measure
) -> List[float] | None:
    """Return the x coordinate of each word on a justified line.

    Args:
        words: Words on the line.
        x: Left edge of the line.
        target_width: Width the line must span exactly.
        measure: Width of a string in the body font.
    Returns:
        One x per word, or None when the line keeps natural spacing (fewer
        than two words, or the words already fill ``target_width``).

    Example:
        >>> justified_positions(words=["ab", "cd", "ef"], x=0, target_width=10, measure=len)
        [0, 4.0, 8.0]
        >>> justified_positions(words=["abcdef", "gh"], x=0, target_width=8, measure=len) is None
        True
    """

    if len(words) < 2:
        return None
    space_width = measure(" ")
    widths = [measure(word) for word in words]
    gaps = len(words) - 1
    extra = target_width - (sum(widths) + space_width * gaps)
    if extra <= 0:
        return None
    extra_per_gap = extra / gaps
    positions: List[float] = []
    cursor = x
    for width in widths:
        positions.append(cursor)
        cursor += width + space_width + extra_per_gap
    return positions


def draw_plain(*, surface: TextSurface, text: str, x: float, y: float) -> None:
    """Draw text left-aligned with natural spacing."""

    surface.draw_text(text.strip(), x, y)


def draw_wrapped_line(
    *,
    surface: TextSurface,
    line: WrappedLine,
    x: float,
    y: float,
    target_width: float,
    measure: Measure,
) -> bool:
    """Draw a wrapped body line, justifying it unless it ends its paragraph.

    Returns:
        True when the line was stretched to ``target_width``.
    """

    if line.is_last_of_group:
        draw_plain(surface=surface, text=line.text, x=x, y=y)
        return False
    positions = justified_positions(
        words=line.words, x=x, target_width=target_width, measure=measure
    )
    if positions is None:
        draw_plain(surface=surface, text=line.text, x=x, y=y)
        return False
    for word, word_x in zip(line.words, positions):
        surface.draw_text(word, word_x, y)
    return True
