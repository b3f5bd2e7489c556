"""
Placeholder substitution for the contract template.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Mapping

TEMPLATE_PATH = Path(__file__).resolve().parent / "data" / "contrato_template.txt"
_PLACEHOLDER_RE = re.compile(r"<<\s*([^<>]+?)\s*>>")
# Keys accepted with or without the accent.
_KEY_ALIASES = {"dirección": "direccion", "direccion": "dirección"}


def load_contract_template(path: Path | None = None) -> str:
    """Return the bundled contract template (or the one at ``path``)."""

    return (path or TEMPLATE_PATH).read_text(encoding="utf-8")


def _with_aliases(data: Mapping[str, object]) -> Dict[str, object]:
    values = dict(data)
    for key, alias in _KEY_ALIASES.items():
        if values.get(key) and not values.get(alias):
            values[alias] = values[key]
    return values


def fill_template(template: str, data: Mapping[str, object]) -> str:
    """Replace ``<<key>>`` tokens (spaces inside the brackets allowed).

    ``None`` values become empty strings; tokens without a value are left in
    place so they can be reported.

    Example:
        >>> fill_template("Sr. << nombre >>, RUT <<rut>>.", {"nombre": "Ana", "rut": None})
        'Sr. Ana, RUT .'
        >>> fill_template("En <<direccion>>", {"dirección": "Av. 1"})
        'En Av. 1'
    """

    out = template
    for key, value in _with_aliases(data).items():
        pattern = re.compile(rf"<<\s*{re.escape(key)}\s*>>")
        replacement = "" if value is None else str(value)
        out = pattern.sub(lambda _match: replacement, out)
    return out


def missing_placeholders(text: str) -> List[str]:
    """Return placeholder names still present in ``text``, in order of appearance.

    Example:
        >>> missing_placeholders("<<a>> y << b >> y <<a>>")
        ['a', 'b']
    """

    seen: List[str] = []
    for match in _PLACEHOLDER_RE.finditer(text):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen
