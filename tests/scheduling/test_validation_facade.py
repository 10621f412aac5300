from __future__ import annotations

from datetime import date

from src.activity_tracking.activity_tracking.scheduling.facade import ValidationFacade
from src.activity_tracking.activity_tracking.scheduling.model import Activity, Interval

D = date(2026, 3, 2)


class FakeStore:
    def __init__(self, activities):
        self.activities = list(activities)
        self.calls = []

    def find_for_resource_date(self, resource_id, work_date, exclude_id=None):
        self.calls.append((resource_id, work_date, exclude_id))
        return [
            a
            for a in self.activities
            if a.resource_id == resource_id and a.work_date == work_date and a.activity_id != exclude_id
        ]


def make(activity_id, start, end=None, resource_id=1, work_date=D) -> Activity:
    return Activity(activity_id=activity_id, resource_id=resource_id, work_date=work_date, interval=Interval(start, end))


def test_check_only_reads_the_store_for_resource_and_date():
    store = FakeStore([make(1, 540, 660), make(2, 540, 660, resource_id=2), make(3, 540, 660, work_date=date(2026, 3, 3))])
    report = ValidationFacade(store).check_only(Interval(600, 720), resource_id=1, work_date=D)

    assert store.calls == [(1, D, None)]
    assert [a.activity_id for a in report.conflicts] == [1]


def test_edit_excludes_itself():
    store = FakeStore([make(1, 540, 660)])
    report = ValidationFacade(store).check_only(Interval(540, 600), resource_id=1, work_date=D, exclude_id=1)

    assert not report.has_conflicts


def test_check_and_adjust_returns_candidate_with_new_interval():
    store = FakeStore([make(1, 540, 660)])
    candidate = Activity(activity_id=None, resource_id=1, work_date=D, interval=Interval(600, 720), notes="hormigonado")

    adjusted = ValidationFacade(store).check_and_adjust(candidate, resource_id=1, work_date=D)

    assert adjusted.interval == Interval(660, 780)
    assert adjusted.notes == "hormigonado"
    assert candidate.interval == Interval(600, 720)


def test_suggest_slots_uses_the_resource_day():
    store = FakeStore([make(1, 0, 600)])
    slots = ValidationFacade(store).suggest_slots(resource_id=1, work_date=D, duration_minutes=60, limit=1)

    assert slots == [Interval(600, 660)]


def test_check_only_is_repeatable_and_leaves_candidate_alone():
    store = FakeStore([make(1, 540, 660), make(2, 700, 760)])
    facade = ValidationFacade(store)
    candidate = Interval(600, 720)

    first = facade.check_only(candidate, resource_id=1, work_date=D)
    second = facade.check_only(candidate, resource_id=1, work_date=D)

    assert first.has_conflicts
    assert first == second
    assert candidate == Interval(600, 720)
    assert [a.interval for a in store.activities] == [Interval(540, 660), Interval(700, 760)]
