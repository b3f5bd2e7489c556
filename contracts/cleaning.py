"""
Small, focused whitespace cleaners applied before classification and wrapping.
"""

import re
from typing import List


_NON_BREAKING_SPACES = re.compile("[\u00a0\u202f]")
_SPACE_RUNS = re.compile(r"[ ]{2,}")
_ANY_WHITESPACE = re.compile(r"\s+")


def clean_line(value: str) -> str:
    """Normalize one source line without touching its leading text.

    Tabs and non-breaking spaces become plain spaces, runs of spaces collapse
    to one and trailing whitespace is dropped.

    Example:
        >>> clean_line("Alumnos nuevos $35.000\\tAlumnos antiguos  ")
        'Alumnos nuevos $35.000 Alumnos antiguos'
    """

    clean = value.replace("\t", " ")
    clean = _NON_BREAKING_SPACES.sub(" ", clean)
    clean = _SPACE_RUNS.sub(" ", clean)
    return clean.rstrip()


def normalize_spaces(value: str) -> str:
    """Collapse every whitespace run into a single space and trim both ends.

    Example:
        >>> normalize_spaces("  a\\u00a0 b\\n c ")
        'a b c'
    """

    return _ANY_WHITESPACE.sub(" ", _NON_BREAKING_SPACES.sub(" ", value)).strip()


def split_source_lines(text: str) -> List[str]:
    """Split raw text into physical lines, accepting CRLF and bare CR endings."""

    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def normalize_lines(text: str) -> List[str]:
    """Return cleaned lines; blank lines are kept as empty strings.

    Example:
        >>> normalize_lines("PRIMERA:\\r\\n \\t\\nTexto  final ")
        ['PRIMERA:', '', 'Texto final']
    """

    return [clean_line(line) for line in split_source_lines(text)]
