"""Conversions between ``HH:MM`` wall clocks and minutes since midnight.

Activities are recorded on a 15-minute grid: 08:00, 08:15, 08:30 and so on.
Minute values handed around the scheduling code are plain integers counted from
midnight of the activity's own date, so an interval that runs past midnight has
an end of 1440 or more.
"""

from __future__ import annotations

import math
import re
from datetime import date, timedelta

from ..core.constants import GRID_MINUTES, MINUTES_PER_DAY
from ..core.exceptions import FormatError

CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def to_minutes(clock: str) -> int:
    """Parse ``HH:MM`` into minutes since midnight."""
    match = CLOCK_PATTERN.match(clock or "")
    if not match:
        raise FormatError(f"Formato de hora inválido (debe ser HH:MM): {clock!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def to_clock(minutes: int) -> str:
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def snap_up(minutes: int) -> int:
    """Round up to the next grid point (a value already on the grid is kept)."""
    return math.ceil(minutes / GRID_MINUTES) * GRID_MINUTES


def is_grid_aligned(clock: str) -> bool:
    return to_minutes(clock) % GRID_MINUTES == 0


def offset_minutes(base_date: date, other_date: date, clock: str) -> int:
    """Minutes from midnight of ``base_date`` to ``clock`` on ``other_date``."""
    return (other_date - base_date).days * MINUTES_PER_DAY + to_minutes(clock)


def split_minutes(base_date: date, minutes: int) -> tuple[date, str]:
    """Inverse of :func:`offset_minutes`: the calendar day and clock of ``minutes``."""
    days, rest = divmod(int(minutes), MINUTES_PER_DAY)
    return base_date + timedelta(days=days), to_clock(rest)
