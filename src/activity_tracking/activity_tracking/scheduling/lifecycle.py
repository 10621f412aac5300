from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.exceptions import AlreadyClosedError, InvalidRangeError
from .model import Activity, Interval
from .time_grid import offset_minutes


class ShiftLifecycle:
    """Open -> closed transition of a single activity.

    Closing does not check collisions: a shift that was harmless while open can
    collide once its real end is known, so callers run the overlap check on the
    returned activity before saving it.
    """

    def close(self, activity: Activity, end_date: date, end_time: str) -> Activity:
        if not activity.is_open:
            raise AlreadyClosedError("La jornada ya está cerrada")

        end = offset_minutes(activity.work_date, end_date, end_time)
        if end <= activity.interval.start:
            raise InvalidRangeError("La fecha y hora de fin debe ser posterior a la de inicio")

        return activity.with_interval(Interval(activity.interval.start, end))

    def infer_end(self, activity: Activity, existing: Iterable[Activity]) -> Optional[int]:
        """Start of the next activity after an open one, if any."""
        if not activity.is_open:
            return None

        followers = [
            other.interval.start
            for other in existing
            if other.activity_id != activity.activity_id and other.interval.start > activity.interval.start
        ]
        return min(followers) if followers else None
