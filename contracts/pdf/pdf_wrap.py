"""Greedy word wrapping for body paragraphs."""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from ..cleaning import normalize_spaces
from ..models import WrappedLine

logger = logging.getLogger(__name__)

Measure = Callable[[str], float]


def wrap_words(*, words: Sequence[str], max_width: float, measure: Measure) -> List[WrappedLine]:
    """Break words into lines no wider than ``max_width`` where possible.

    Words are added to the current line while the joined text still fits.
    A word wider than ``max_width`` is placed alone on its own line and left
    to overflow the margin.

    Args:
        words: Words in reading order.
        max_width: Usable line width in points.
        measure: Width of a string in the body font.
    Returns:
        Wrapped lines; only the final one has ``is_last_of_group`` set.

    Example:
        >>> lines = wrap_words(words="aa bb cc".split(), max_width=5, measure=len)
        >>> [(line.text, line.is_last_of_group) for line in lines]
        [('aa bb', False), ('cc', True)]
    """

    lines: List[WrappedLine] = []
    current: List[str] = []
    current_text = ""
    for word in words:
        if not current:
            current, current_text = [word], word
        else:
            candidate = f"{current_text} {word}"
            if measure(candidate) <= max_width:
                current.append(word)
                current_text = candidate
            else:
                lines.append(WrappedLine(current))
                current, current_text = [word], word
        if len(current) == 1 and measure(word) > max_width:
            logger.debug("Word %r is wider than the line (%.2fpt), letting it overflow", word, max_width)
    if current:
        lines.append(WrappedLine(current))
    if lines:
        lines[-1].is_last_of_group = True
    return lines


def wrap_body_line(*, text: str, max_width: float, measure: Measure) -> List[WrappedLine]:
    """Normalize a body line and wrap it.

    Example:
        >>> [line.text for line in wrap_body_line(text=" a\\tb  c ", max_width=3, measure=len)]
        ['a b', 'c']
    """

    words = normalize_spaces(text.replace("\t", " ")).split(" ")
    return wrap_words(words=[word for word in words if word], max_width=max_width, measure=measure)
