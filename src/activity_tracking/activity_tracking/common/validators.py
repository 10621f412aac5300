from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import FormatError, ValidationError
from ..scheduling.time_grid import is_grid_aligned, to_minutes


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} debe ser un número entero positivo")
    if isinstance(value, bool) or number <= 0:
        raise ValidationError(f"{field_name} debe ser un número entero positivo")
    return number


def optional_positive_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return require_positive_int(value, field_name)


def require_clock(value: Any, field_name: str) -> str:
    """Validate an HH:MM wall clock on the 15-minute grid and return it."""
    if not isinstance(value, str):
        raise FormatError(f"{field_name} debe tener formato HH:MM")
    clock = value.strip()
    try:
        to_minutes(clock)
    except FormatError:
        raise FormatError(f"{field_name} debe tener formato HH:MM")
    if not is_grid_aligned(clock):
        raise FormatError(f"{field_name} debe estar en intervalos de 15 minutos (00, 15, 30, 45)")
    return clock


def optional_notes(value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if len(text) > max_length:
        raise ValidationError(f"Las observaciones no pueden superar los {max_length} caracteres")
    return text or None
