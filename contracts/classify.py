"""
Heading detection for contract text that carries no explicit markup.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from .cleaning import normalize_lines
from .models import Blank, BodyLine, Paragraph, Subtitle

SUBTITLE_MAX_LENGTH = 70
SUBTITLE_MAX_WORDS = 8
# Clause labels such as "PRIMERA:" or "Cláusula tercera:".
_LABEL_RE = re.compile(r"^(?:[^\W\d_]|\s){3,40}:\s*$")


def is_subtitle_line(line: str) -> bool:
    """Return True when a line looks like a clause heading.

    Short "label:" lines and short all-caps lines are headings. Numbered
    items ("1.- ...") and long all-caps sentences stay body text.

    Example:
        >>> is_subtitle_line("PRIMERA:")
        True
        >>> is_subtitle_line("OBJETO DEL CONTRATO")
        True
        >>> is_subtitle_line("Por medio del presente contrato, la academia inscribe al alumno.")
        False
    """

    text = line.strip()
    if not text or len(text) > SUBTITLE_MAX_LENGTH:
        return False
    if _LABEL_RE.match(text):
        return True
    return text == text.upper() and len(text.split()) <= SUBTITLE_MAX_WORDS


def classify_line(line: str) -> Paragraph:
    """Return the paragraph variant for one normalized line."""

    if not line.strip():
        return Blank()
    if is_subtitle_line(line):
        return Subtitle(line.strip())
    return BodyLine(line.strip())


def classify_lines(lines: Iterable[str]) -> List[Paragraph]:
    """Classify normalized lines, folding runs of blank lines into one marker.

    Example:
        >>> classify_lines(["PRIMERA:", "", "", "El apoderado declara."])
        [Subtitle(text='PRIMERA:'), Blank(), BodyLine(text='El apoderado declara.')]
    """

    result: List[Paragraph] = []
    for line in lines:
        item = classify_line(line)
        if isinstance(item, Blank) and result and isinstance(result[-1], Blank):
            continue
        result.append(item)
    return result


def classify_text(text: str) -> List[Paragraph]:
    """Normalize and classify a full text blob."""

    return classify_lines(normalize_lines(text))
