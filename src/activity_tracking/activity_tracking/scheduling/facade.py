from __future__ import annotations

from datetime import date
from typing import Optional

from ..activities.repository import IntervalStore
from ..core.enums import ResolveMode
from .model import Activity, ConflictReport, Interval
from .overlap import OverlapResolver
from .slots import SlotSuggester


class ValidationFacade:
    """Load a resource's day from the store and run the scheduling rules on it.

    Nothing here writes; the caller decides whether to persist the result.
    """

    def __init__(
        self,
        store: IntervalStore,
        *,
        resolver: OverlapResolver | None = None,
        suggester: SlotSuggester | None = None,
    ):
        self._store = store
        self._resolver = resolver or OverlapResolver()
        self._suggester = suggester or SlotSuggester(policy=self._resolver.policy)

    def check_only(
        self,
        candidate: Interval,
        *,
        resource_id: int,
        work_date: date,
        exclude_id: Optional[int] = None,
    ) -> ConflictReport:
        existing = self._store.find_for_resource_date(resource_id, work_date, exclude_id)
        return self._resolver.resolve(candidate, existing, mode=ResolveMode.VALIDATE_ONLY)

    def check_and_adjust(
        self,
        candidate: Activity,
        *,
        resource_id: int,
        work_date: date,
        exclude_id: Optional[int] = None,
    ) -> Activity:
        existing = self._store.find_for_resource_date(resource_id, work_date, exclude_id)
        adjusted = self._resolver.resolve(candidate.interval, existing, mode=ResolveMode.AUTO_ADJUST)
        return candidate.with_interval(adjusted)

    def suggest_slots(
        self,
        *,
        resource_id: int,
        work_date: date,
        duration_minutes: int,
        limit: Optional[int] = None,
    ) -> list[Interval]:
        existing = self._store.find_for_resource_date(resource_id, work_date)
        return self._suggester.suggest(existing, duration_minutes, limit=limit)
