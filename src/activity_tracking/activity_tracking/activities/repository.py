from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftState
from ..scheduling.model import Activity


class IntervalStore(Protocol):
    def find_for_resource_date(
        self, resource_id: int, work_date: date, exclude_id: Optional[int] = None
    ) -> Sequence[Activity]:
        """All activities (open and closed) of a resource starting on a date.

        ``exclude_id`` leaves out the activity being edited. No ordering is implied.
        """

        raise NotImplementedError


@dataclass(frozen=True)
class ActivityFilters:
    work_id: Optional[int] = None
    resource_id: Optional[int] = None
    activity_type_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    state: Optional[ShiftState] = None
    created_by: Optional[int] = None


class ActivityRepository(IntervalStore, Protocol):
    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        raise NotImplementedError

    def search(self, *, filters: ActivityFilters, offset: int, limit: int) -> tuple[Sequence[Activity], int]:
        """Page of activities, newest first, together with the total count."""

        raise NotImplementedError

    def list_open(self, *, resource_id: Optional[int] = None) -> Sequence[Activity]:
        raise NotImplementedError

    def create(self, activity: Activity) -> int:
        raise NotImplementedError

    def update(self, activity: Activity) -> bool:
        raise NotImplementedError

    def delete(self, activity_id: int) -> bool:
        raise NotImplementedError
