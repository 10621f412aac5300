from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..catalog.model import Resource
from ..catalog.repository import CatalogRepository
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_SLOT_MINUTES, MAX_PAGE_SIZE, MINUTES_PER_DAY
from ..core.exceptions import NotFoundError, OverlapError, ValidationError
from ..scheduling.facade import ValidationFacade
from ..scheduling.lifecycle import ShiftLifecycle
from ..scheduling.lock import ResourceDateLock
from ..scheduling.model import Activity, Interval
from ..scheduling.overlap import describe_conflicts
from ..scheduling.time_grid import offset_minutes, split_minutes, to_minutes
from .model import (
    ActivityChanges,
    ActivityPage,
    ActivityStatistics,
    NewActivity,
    SavedActivity,
    ValidationOutcome,
)
from .repository import ActivityFilters, ActivityRepository

LOGGER = logging.getLogger("activity_tracking.activities")


def fits_work_date(interval: Interval) -> bool:
    """An adjusted activity must still start on its own date."""
    return interval.start < MINUTES_PER_DAY


def build_interval(
    work_date: date,
    start_time: str,
    end_date: Optional[date],
    end_time: Optional[str],
) -> Interval:
    if (end_date is None) != (end_time is None):
        raise ValidationError(
            "Si se proporciona fecha de fin, también se debe proporcionar hora de fin (y viceversa)"
        )
    start = to_minutes(start_time)
    if end_date is None:
        return Interval(start)
    return Interval(start, offset_minutes(work_date, end_date, end_time))


class ActivityService:
    def __init__(
        self,
        activities: ActivityRepository,
        catalog: CatalogRepository,
        *,
        facade: ValidationFacade | None = None,
        lifecycle: ShiftLifecycle | None = None,
        locks: ResourceDateLock | None = None,
        auto_adjust: bool = True,
        suggest_limit: Optional[int] = None,
    ):
        self._activities = activities
        self._catalog = catalog
        self._facade = facade or ValidationFacade(activities)
        self._lifecycle = lifecycle or ShiftLifecycle()
        self._locks = locks or ResourceDateLock()
        self._auto_adjust = bool(auto_adjust)
        self._suggest_limit = suggest_limit

    # Queries

    def get(self, activity_id: int) -> Activity:
        activity = self._activities.get_by_id(int(activity_id))
        if not activity:
            raise NotFoundError("Actividad no encontrada")
        return activity

    def search(
        self,
        filters: ActivityFilters,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> ActivityPage:
        page = max(1, int(page))
        limit = min(max(1, int(limit)), MAX_PAGE_SIZE)
        items, total = self._activities.search(filters=filters, offset=(page - 1) * limit, limit=limit)
        return ActivityPage(items=list(items), total=total, page=page, total_pages=math.ceil(total / limit))

    def list_open(self, resource_id: Optional[int] = None) -> list[Activity]:
        return list(self._activities.list_open(resource_id=resource_id))

    def list_for_resource_date(self, resource_id: int, work_date: date) -> list[Activity]:
        found = self._activities.find_for_resource_date(int(resource_id), work_date)
        return sorted(found, key=lambda a: (a.interval.start, a.activity_id or 0))

    def list_active_resources(self) -> list[Resource]:
        return list(self._catalog.list_active_resources())

    def statistics(self, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> ActivityStatistics:
        filters = ActivityFilters(date_from=date_from, date_to=date_to)
        total = opened = 0
        minutes = 0
        offset = 0
        while True:
            batch, count = self._activities.search(filters=filters, offset=offset, limit=MAX_PAGE_SIZE)
            for activity in batch:
                total += 1
                if activity.is_open:
                    opened += 1
                else:
                    minutes += activity.interval.duration
            offset += len(batch)
            if not batch or offset >= count:
                break

        return ActivityStatistics(
            total=total,
            open=opened,
            closed=total - opened,
            total_hours=round(minutes / 60, 2),
        )

    def suggest_slots(
        self,
        *,
        resource_id: int,
        work_date: date,
        duration_minutes: int = DEFAULT_SLOT_MINUTES,
    ) -> list[Interval]:
        return self._facade.suggest_slots(
            resource_id=int(resource_id),
            work_date=work_date,
            duration_minutes=int(duration_minutes),
            limit=self._suggest_limit,
        )

    def calculate_end(self, activity_id: int) -> Optional[tuple[date, str]]:
        """Proposed end of an open shift: the start of the next activity that day."""
        activity = self.get(activity_id)
        following = self._activities.find_for_resource_date(
            activity.resource_id, activity.work_date, activity.activity_id
        )
        end = self._lifecycle.infer_end(activity, following)
        if end is None:
            return None
        return split_minutes(activity.work_date, end)

    def validate(self, data: NewActivity, *, exclude_id: Optional[int] = None) -> ValidationOutcome:
        candidate = self._candidate(data)
        report = self._facade.check_only(
            candidate.interval,
            resource_id=candidate.resource_id,
            work_date=candidate.work_date,
            exclude_id=exclude_id,
        )
        proposal = candidate.interval
        message = None
        if report.has_conflicts:
            proposal = self._facade.check_and_adjust(
                candidate,
                resource_id=candidate.resource_id,
                work_date=candidate.work_date,
                exclude_id=exclude_id,
            ).interval
            message = describe_conflicts(report.conflicts)
            if not fits_work_date(proposal):
                proposal = None
                message = f"{message}. No queda hueco libre en la fecha"
        return ValidationOutcome(
            requested=candidate.interval,
            conflicts=report.conflicts,
            proposal=proposal,
            message=message,
        )

    # Commands

    def create(self, data: NewActivity) -> SavedActivity:
        self._require_resource(data.resource_id)
        self._require_work(data.work_id)
        self._require_activity_type(data.activity_type_id)
        candidate = self._candidate(data)

        with self._locks.hold(candidate.resource_id, candidate.work_date):
            saved = self._reconcile(candidate, exclude_id=None)
            new_id = self._activities.create(saved.activity)
            saved = replace(saved, activity=replace(saved.activity, activity_id=new_id))
            self._recalculate_open_shifts(candidate.resource_id, candidate.work_date)

        LOGGER.info(
            "Activity %s created for resource %s on %s (%s)",
            new_id, candidate.resource_id, candidate.work_date, saved.activity.interval,
        )
        return saved

    def update(self, activity_id: int, changes: ActivityChanges) -> SavedActivity:
        current = self.get(activity_id)

        if changes.resource_id is not None and changes.resource_id != current.resource_id:
            self._require_resource(changes.resource_id)
        if changes.work_id is not None and changes.work_id != current.work_id:
            self._require_work(changes.work_id)
        if changes.activity_type_id is not None and changes.activity_type_id != current.activity_type_id:
            self._require_activity_type(changes.activity_type_id)

        work_date = changes.work_date or current.work_date
        interval = current.interval
        if changes.touches_time:
            interval = build_interval(
                work_date,
                changes.start_time or current.start_time,
                changes.end_date or current.end_date,
                changes.end_time or current.end_time,
            )

        candidate = replace(
            current,
            resource_id=changes.resource_id or current.resource_id,
            work_id=changes.work_id or current.work_id,
            activity_type_id=changes.activity_type_id or current.activity_type_id,
            work_date=work_date,
            interval=interval,
            notes=changes.notes if changes.notes is not None else current.notes,
            modified_by=changes.modified_by,
        )

        with self._locks.hold(candidate.resource_id, candidate.work_date):
            if changes.touches_time or candidate.resource_id != current.resource_id:
                saved = self._reconcile(candidate, exclude_id=current.activity_id)
            else:
                saved = SavedActivity(activity=candidate, requested=candidate.interval)

            if not self._activities.update(saved.activity):
                raise NotFoundError("Actividad no encontrada")
            if changes.touches_time or candidate.resource_id != current.resource_id:
                self._recalculate_open_shifts(candidate.resource_id, candidate.work_date)

        LOGGER.info("Activity %s updated (%s)", current.activity_id, saved.activity.interval)
        return saved

    def close(
        self,
        activity_id: int,
        *,
        end_date: date,
        end_time: str,
        user_id: Optional[int] = None,
    ) -> SavedActivity:
        activity = self.get(activity_id)

        with self._locks.hold(activity.resource_id, activity.work_date):
            closed = self._lifecycle.close(activity, end_date, end_time)
            closed = replace(closed, modified_by=user_id)
            saved = self._reconcile(closed, exclude_id=activity.activity_id)
            if not self._activities.update(saved.activity):
                raise NotFoundError("Actividad no encontrada")

        LOGGER.info("Shift %s closed at %s %s", activity.activity_id, saved.activity.end_date, saved.activity.end_time)
        return saved

    def delete(self, activity_id: int) -> None:
        activity = self.get(activity_id)
        with self._locks.hold(activity.resource_id, activity.work_date):
            if not self._activities.delete(activity.activity_id):
                raise NotFoundError("Actividad no encontrada")
        LOGGER.info("Activity %s deleted", activity.activity_id)

    # Helpers

    def _candidate(self, data: NewActivity) -> Activity:
        return Activity(
            activity_id=None,
            resource_id=int(data.resource_id),
            work_date=data.work_date,
            interval=build_interval(data.work_date, data.start_time, data.end_date, data.end_time),
            work_id=data.work_id,
            activity_type_id=data.activity_type_id,
            notes=data.notes,
            created_by=data.created_by,
        )

    def _reconcile(self, candidate: Activity, *, exclude_id: Optional[int]) -> SavedActivity:
        report = self._facade.check_only(
            candidate.interval,
            resource_id=candidate.resource_id,
            work_date=candidate.work_date,
            exclude_id=exclude_id,
        )
        if not report.has_conflicts:
            return SavedActivity(activity=candidate, requested=candidate.interval)

        if not self._auto_adjust:
            raise OverlapError(describe_conflicts(report.conflicts), report.conflicts)

        adjusted = self._facade.check_and_adjust(
            candidate,
            resource_id=candidate.resource_id,
            work_date=candidate.work_date,
            exclude_id=exclude_id,
        )
        if not fits_work_date(adjusted.interval):
            LOGGER.info(
                "Resource %s on %s: no room left for %s",
                candidate.resource_id, candidate.work_date, candidate.interval,
            )
            raise OverlapError(
                f"{describe_conflicts(report.conflicts)}. No queda hueco libre en la fecha",
                report.conflicts,
            )
        LOGGER.info(
            "Resource %s on %s: %s moved to %s (%d conflicts)",
            candidate.resource_id, candidate.work_date, candidate.interval, adjusted.interval, len(report.conflicts),
        )
        return SavedActivity(activity=adjusted, requested=candidate.interval, conflicts=report.conflicts)

    def _recalculate_open_shifts(self, resource_id: int, work_date: date) -> None:
        day: Sequence[Activity] = self._activities.find_for_resource_date(resource_id, work_date)
        for activity in day:
            end = self._lifecycle.infer_end(activity, day)
            if end is None:
                continue
            self._activities.update(activity.with_interval(Interval(activity.interval.start, end)))
            LOGGER.info("Open shift %s closed at %s by a later activity", activity.activity_id, split_minutes(work_date, end)[1])

    def _require_resource(self, resource_id: int) -> Resource:
        resource = self._catalog.get_resource(int(resource_id))
        if not resource:
            raise NotFoundError("Recurso no encontrado")
        if not resource.active:
            raise ValidationError("El recurso seleccionado no está activo")
        return resource

    def _require_work(self, work_id: int) -> None:
        work = self._catalog.get_work(int(work_id))
        if not work:
            raise NotFoundError("Obra no encontrada")
        if not work.active:
            raise ValidationError("La obra seleccionada no está activa")

    def _require_activity_type(self, activity_type_id: int) -> None:
        if not self._catalog.get_activity_type(int(activity_type_id)):
            raise NotFoundError("Tipo de actividad no encontrado")

