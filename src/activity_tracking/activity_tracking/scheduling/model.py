from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_OPEN_SHIFT_MINUTES
from ..core.enums import ShiftState
from ..core.exceptions import InvalidRangeError
from .time_grid import split_minutes, to_clock


@dataclass(frozen=True)
class Interval:
    """Minutes since midnight of the activity date; ``end=None`` is an open shift."""

    start: int
    end: Optional[int] = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end <= self.start:
            raise InvalidRangeError("La fecha y hora de fin debe ser posterior a la de inicio")

    @property
    def is_open(self) -> bool:
        return self.end is None

    @property
    def duration(self) -> Optional[int]:
        return None if self.end is None else self.end - self.start

    def __str__(self) -> str:
        end = "abierta" if self.end is None else to_clock(self.end)
        return f"{to_clock(self.start)}-{end}"


@dataclass(frozen=True)
class OpenShiftPolicy:
    """Assumed extent of a shift that has not been closed yet.

    Only used when comparing intervals; the stored activity keeps no end.
    """

    default_duration_minutes: int = DEFAULT_OPEN_SHIFT_MINUTES

    def effective(self, interval: Interval) -> Interval:
        if interval.end is not None:
            return interval
        return Interval(interval.start, interval.start + self.default_duration_minutes)


@dataclass(frozen=True)
class Activity:
    """Entidad de dominio: una actividad (jornada) de un recurso en una obra."""

    activity_id: Optional[int]
    resource_id: int
    work_date: date
    interval: Interval
    work_id: Optional[int] = None
    activity_type_id: Optional[int] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None
    modified_by: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.interval.is_open

    @property
    def state(self) -> ShiftState:
        return ShiftState.ABIERTA if self.is_open else ShiftState.CERRADA

    @property
    def start_time(self) -> str:
        return to_clock(self.interval.start)

    @property
    def end_date(self) -> Optional[date]:
        if self.interval.end is None:
            return None
        return split_minutes(self.work_date, self.interval.end)[0]

    @property
    def end_time(self) -> Optional[str]:
        if self.interval.end is None:
            return None
        return split_minutes(self.work_date, self.interval.end)[1]

    @property
    def duration_hours(self) -> Optional[float]:
        minutes = self.interval.duration
        return round(minutes / 60, 2) if minutes else None

    def with_interval(self, interval: Interval) -> "Activity":
        return replace(self, interval=interval)


@dataclass(frozen=True)
class ConflictReport:
    has_conflicts: bool
    conflicts: list[Activity] = field(default_factory=list)
