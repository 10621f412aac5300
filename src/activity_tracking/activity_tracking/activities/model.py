from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..scheduling.model import Activity, Interval


@dataclass(frozen=True)
class NewActivity:
    """Validated input for creating (or checking) an activity."""

    work_id: Optional[int]
    resource_id: int
    activity_type_id: Optional[int]
    work_date: date
    start_time: str
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None


@dataclass(frozen=True)
class ActivityChanges:
    """Partial update; ``None`` keeps the stored value."""

    work_id: Optional[int] = None
    resource_id: Optional[int] = None
    activity_type_id: Optional[int] = None
    work_date: Optional[date] = None
    start_time: Optional[str] = None
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None
    modified_by: Optional[int] = None

    @property
    def touches_time(self) -> bool:
        return any(v is not None for v in (self.work_date, self.start_time, self.end_date, self.end_time))


@dataclass(frozen=True)
class SavedActivity:
    """Outcome of a write: what was stored and whether it had to be moved."""

    activity: Activity
    requested: Interval
    conflicts: list[Activity] = field(default_factory=list)

    @property
    def adjusted(self) -> bool:
        return self.activity.interval != self.requested


@dataclass(frozen=True)
class ValidationOutcome:
    requested: Interval
    conflicts: list[Activity]
    proposal: Optional[Interval]
    message: Optional[str] = None

    @property
    def has_overlap(self) -> bool:
        return bool(self.conflicts)


@dataclass(frozen=True)
class ActivityPage:
    items: list[Activity]
    total: int
    page: int
    total_pages: int


@dataclass(frozen=True)
class ActivityStatistics:
    total: int
    open: int
    closed: int
    total_hours: float
