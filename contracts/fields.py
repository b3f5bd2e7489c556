"""
Formatting and validation of the values substituted into the contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Mapping

SPANISH_MONTHS = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)
REQUIRED_FIELDS = ("nombre_apoderado", "rut_apoderado", "nombre_jugador", "rut_jugador")
_RUT_BODY_RE = re.compile(r"^\d{7,8}$")
_NON_DIGITS = re.compile(r"\D")


class ContractFieldError(ValueError):
    """Raised when a contract record is missing data or carries a malformed RUT."""


def rut_digits(value: object) -> str:
    """Return only the digits of a RUT body."""

    return _NON_DIGITS.sub("", "" if value is None else str(value))


def rut_check_digit(value: object) -> str:
    """Return the modulo-11 check digit for a RUT body.

    Returns:
        ``"0"``-``"9"`` or ``"K"``; an empty string when there is no positive body.

    Example:
        >>> rut_check_digit("20394587")
        '6'
        >>> rut_check_digit("78161873")
        'K'
    """

    digits = rut_digits(value)
    if not digits or int(digits) <= 0:
        return ""
    total = 0
    multiplier = 2
    for digit in reversed(digits):
        total += int(digit) * multiplier
        multiplier = 2 if multiplier == 7 else multiplier + 1
    check = 11 - total % 11
    if check == 11:
        return "0"
    if check == 10:
        return "K"
    return str(check)


def format_rut(value: object) -> str:
    """Format a RUT body as ``BODY-DV`` without thousands separators.

    Example:
        >>> format_rut("20.394.587")
        '20394587-6'
        >>> format_rut("")
        ''
    """

    digits = rut_digits(value)
    if not digits:
        return ""
    check = rut_check_digit(digits)
    return f"{digits}-{check}" if check else digits


def long_date_es(day: date) -> str:
    """Return a long Spanish date such as ``05 de Marzo de 2026``.

    Example:
        >>> long_date_es(date(2026, 3, 5))
        '05 de Marzo de 2026'
    """

    return f"{day.day:02d} de {SPANISH_MONTHS[day.month - 1]} de {day.year}"


@dataclass(slots=True)
class ContractRecord:
    """Guardian and player data needed to fill the contract."""

    nombre_apoderado: str
    rut_apoderado: str
    nombre_jugador: str
    rut_jugador: str
    fecha_nacimiento: str = ""
    direccion: str = ""
    comuna: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "ContractRecord":
        """Build a record from loosely shaped input, e.g. a JSON object.

        Raises:
            ContractFieldError: When a required field is missing or blank.
        """

        missing = [key for key in REQUIRED_FIELDS if not str(data.get(key) or "").strip()]
        if missing:
            raise ContractFieldError(f"missing required contract fields: {', '.join(missing)}")

        def text(*keys: str) -> str:
            for key in keys:
                value = data.get(key)
                if value is not None and str(value).strip():
                    return str(value).strip()
            return ""

        return cls(
            nombre_apoderado=text("nombre_apoderado"),
            rut_apoderado=text("rut_apoderado"),
            nombre_jugador=text("nombre_jugador"),
            rut_jugador=text("rut_jugador"),
            fecha_nacimiento=text("fecha_nacimiento"),
            direccion=text("direccion", "dirección"),
            comuna=text("comuna", "comuna_id"),
        )


def _checked_rut(label: str, value: str) -> str:
    digits = rut_digits(value)
    if not _RUT_BODY_RE.match(digits):
        raise ContractFieldError(f"RUT for {label} must have 7 or 8 digits (without check digit)")
    return format_rut(digits)


def contract_fields(record: ContractRecord, *, today: date | None = None) -> Dict[str, str]:
    """Return the placeholder values for ``record``.

    Args:
        record: Guardian and player data.
        today: Contract date; defaults to the current date.
    Returns:
        Mapping of template placeholder names to display strings.
    Raises:
        ContractFieldError: When either RUT body is not 7 or 8 digits.
    """

    return {
        "fecha_contrato": long_date_es(today or date.today()),
        "nombre_apoderado": record.nombre_apoderado,
        "rut_apoderado": _checked_rut("apoderado", record.rut_apoderado),
        "nombre_jugador": record.nombre_jugador,
        "rut_jugador": _checked_rut("jugador", record.rut_jugador),
        "fecha_nacimiento": record.fecha_nacimiento,
        "dirección": record.direccion,
        "comuna_id": record.comuna,
    }
