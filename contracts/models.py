"""
Typed containers for contract text as it moves through layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass(slots=True, frozen=True)
class Subtitle:
    """A short heading line rendered bold and underlined, never wrapped."""

    text: str


@dataclass(slots=True, frozen=True)
class BodyLine:
    """A prose paragraph held on a single source line."""

    text: str


@dataclass(slots=True, frozen=True)
class Blank:
    """Explicit blank-line marker separating paragraphs."""


Paragraph = Union[Subtitle, BodyLine, Blank]


@dataclass(slots=True)
class WrappedLine:
    """One physical output line produced by the word wrapper.

    Attributes:
        words: Words in reading order, without surrounding whitespace.
        is_last_of_group: True for the final line of a paragraph; such lines
            are drawn ragged-right and never justified.

    Example:
        >>> WrappedLine(["quick", "brown"], is_last_of_group=True).text
        'quick brown'
    """

    words: List[str] = field(default_factory=list)
    is_last_of_group: bool = False

    @property
    def text(self) -> str:
        return " ".join(self.words)


@dataclass(slots=True)
class Cursor:
    """Mutable pen position. ``y`` is measured top-down from the page edge."""

    page_number: int = 1
    y: float = 0.0
