from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..core.exceptions import FormatError


def parse_iso_date(value: Any) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise FormatError("Formato de fecha inválido (debe ser YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise FormatError("Formato de fecha inválido (debe ser YYYY-MM-DD)")


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")

