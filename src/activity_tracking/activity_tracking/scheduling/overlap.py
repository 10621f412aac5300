"""Collision detection and re-slotting for one resource on one date.

A resource can only be in one place at a time. Given the candidate interval of a
new or edited activity and the activities already booked for the same resource
and date, the resolver either lists the collisions or moves the candidate so it
no longer collides:

* a candidate that starts before the activity it hits is shortened to end where
  that activity begins;
* otherwise the candidate keeps its length and is pushed to start where that
  activity ends.

Existing activities are scanned once in start order and every step only moves
the candidate later, so a single pass is enough. Bounds that moved are snapped
up to the 15-minute grid afterwards and are not checked again: when the inputs
are off-grid the snap may reintroduce an overlap of a few minutes.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from ..core.constants import GRID_MINUTES
from ..core.enums import ResolveMode
from .model import Activity, ConflictReport, Interval, OpenShiftPolicy
from .time_grid import snap_up


def _collides(start: int, end: int, other: Interval) -> bool:
    return other.start < end and other.end > start


class OverlapResolver:
    def __init__(self, policy: OpenShiftPolicy | None = None):
        self._policy = policy or OpenShiftPolicy()

    @property
    def policy(self) -> OpenShiftPolicy:
        return self._policy

    def resolve(
        self,
        candidate: Interval,
        existing: Iterable[Activity],
        *,
        mode: ResolveMode,
    ) -> Union[Interval, ConflictReport]:
        if mode == ResolveMode.VALIDATE_ONLY:
            return self.find_conflicts(candidate, existing)
        return self.adjust(candidate, existing)

    def sort_existing(self, existing: Iterable[Activity]) -> list[Activity]:
        """Start ascending; ties by activity id, unsaved ones last."""
        return sorted(
            existing,
            key=lambda a: (a.interval.start, a.activity_id is None, a.activity_id or 0),
        )

    def find_conflicts(self, candidate: Interval, existing: Iterable[Activity]) -> ConflictReport:
        span = self._policy.effective(candidate)
        conflicts = [
            other
            for other in self.sort_existing(existing)
            if _collides(span.start, span.end, self._policy.effective(other.interval))
        ]
        return ConflictReport(has_conflicts=bool(conflicts), conflicts=conflicts)

    def adjust(self, candidate: Interval, existing: Iterable[Activity]) -> Interval:
        ordered = self.sort_existing(existing)
        if not ordered:
            return candidate

        span = self._policy.effective(candidate)
        adj_start, adj_end = span.start, span.end

        for other in ordered:
            busy = self._policy.effective(other.interval)
            if not _collides(adj_start, adj_end, busy):
                continue
            if adj_start < busy.start:
                adj_end = busy.start
            else:
                duration = adj_end - adj_start
                adj_start = busy.end
                adj_end = adj_start + duration

        if adj_start != span.start:
            adj_start = snap_up(adj_start)
        if adj_end != span.end:
            adj_end = snap_up(adj_end)
        if adj_end <= adj_start:
            adj_end = adj_start + GRID_MINUTES

        if candidate.end is None:
            return Interval(adj_start)
        return Interval(adj_start, adj_end)


def describe_conflicts(conflicts: Sequence[Activity]) -> str:
    """Human readable summary used in API messages."""
    details = ", ".join(
        f"actividad {c.activity_id} ({c.work_date:%Y-%m-%d} {c.start_time}"
        + (f" - {c.end_date:%Y-%m-%d} {c.end_time})" if not c.is_open else " (jornada abierta))")
        for c in conflicts
    )
    return f"La actividad se solapa con: {details}"
