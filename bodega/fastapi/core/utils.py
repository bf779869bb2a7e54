"""
Utility functions for normalizing roster fields.

Cedulas and names are stored upper-cased so lookups by cedula are
case-insensitive, the same way operators type them at the kiosk.
"""

import re
from datetime import datetime, timezone

CEDULA_PATTERN = re.compile(r"^[A-Z0-9-]{3,20}$")


def normalize_cedula(cedula: str) -> str:
    """
    Normalize a cedula by stripping surrounding whitespace and upper-casing.

    Examples:
        " 12345 " -> "12345"
        "ab-991" -> "AB-991"
    """
    if not cedula:
        return ""
    return cedula.strip().upper()


def normalize_nombre(nombre: str) -> str:
    """
    Normalize an employee name: collapse inner whitespace and upper-case.

    Examples:
        "  ana   maría " -> "ANA MARÍA"
    """
    if not nombre:
        return ""
    return " ".join(nombre.split()).upper()


def is_valid_cedula(cedula: str) -> bool:
    """Check an already-normalized cedula against the accepted format."""
    return bool(CEDULA_PATTERN.match(cedula))


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the way timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
