from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidRangeError, ValidationError
from .model import Activity, Interval, OpenShiftPolicy


class SlotSuggester:
    """Propose free windows of a given length inside a working-hours window."""

    def __init__(
        self,
        *,
        day_start: int = 0,
        day_end: int = MINUTES_PER_DAY,
        policy: OpenShiftPolicy | None = None,
    ):
        if day_end <= day_start:
            raise InvalidRangeError("El fin de la jornada laboral debe ser posterior a su inicio")
        self._day_start = int(day_start)
        self._day_end = int(day_end)
        self._policy = policy or OpenShiftPolicy()

    def suggest(
        self,
        existing: Iterable[Activity],
        duration_minutes: int,
        *,
        limit: Optional[int] = None,
    ) -> list[Interval]:
        if int(duration_minutes) <= 0:
            raise ValidationError("La duración debe ser un número positivo de minutos")
        duration = int(duration_minutes)

        busy = sorted(
            (self._policy.effective(a.interval) for a in existing),
            key=lambda iv: (iv.start, iv.end),
        )

        slots: list[Interval] = []
        cursor = self._day_start
        for span in busy:
            gap_end = min(span.start, self._day_end)
            if gap_end - cursor >= duration:
                slots.append(Interval(cursor, cursor + duration))
            cursor = max(cursor, span.end)
            if cursor >= self._day_end:
                break
        if self._day_end - cursor >= duration:
            slots.append(Interval(cursor, cursor + duration))

        if limit is not None:
            return slots[: max(0, int(limit))]
        return slots
