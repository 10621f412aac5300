from __future__ import annotations

from datetime import date

import pytest

from src.activity_tracking.activity_tracking.core.exceptions import InvalidRangeError, ValidationError
from src.activity_tracking.activity_tracking.scheduling.model import Activity, Interval
from src.activity_tracking.activity_tracking.scheduling.slots import SlotSuggester
from src.activity_tracking.activity_tracking.scheduling.time_grid import to_minutes

D = date(2026, 3, 2)


def booked(activity_id, start, end=None) -> Activity:
    return Activity(
        activity_id=activity_id,
        resource_id=1,
        work_date=D,
        interval=Interval(to_minutes(start), to_minutes(end) if end else None),
    )


def clocks(slots):
    return [(s.start // 60, s.end // 60) for s in slots]


def test_empty_day_offers_the_window_start():
    suggester = SlotSuggester(day_start=to_minutes("06:00"), day_end=to_minutes("22:00"))
    assert suggester.suggest([], 60) == [Interval(360, 420)]


def test_one_suggestion_per_gap():
    suggester = SlotSuggester(day_start=to_minutes("06:00"), day_end=to_minutes("22:00"))
    existing = [booked(2, "12:00", "14:00"), booked(1, "08:00", "10:00")]

    assert clocks(suggester.suggest(existing, 120)) == [(6, 8), (10, 12), (14, 16)]


def test_gaps_shorter_than_duration_are_skipped():
    suggester = SlotSuggester(day_start=to_minutes("08:00"), day_end=to_minutes("12:00"))
    existing = [booked(1, "08:30", "10:00"), booked(2, "10:30", "11:30")]

    assert suggester.suggest(existing, 60) == []
    assert suggester.suggest(existing, 30) == [Interval(480, 510), Interval(600, 630), Interval(690, 720)]


def test_open_shifts_block_their_assumed_hour():
    suggester = SlotSuggester(day_start=to_minutes("08:00"), day_end=to_minutes("10:00"))
    assert suggester.suggest([booked(1, "08:00")], 60) == [Interval(540, 600)]


def test_limit_caps_results():
    suggester = SlotSuggester()
    existing = [booked(i, f"{h:02d}:00", f"{h:02d}:30") for i, h in enumerate(range(1, 23, 2), start=1)]

    assert len(suggester.suggest(existing, 30, limit=5)) == 5
    assert len(suggester.suggest(existing, 30)) > 5


def test_rejects_non_positive_duration():
    with pytest.raises(ValidationError):
        SlotSuggester().suggest([], 0)


def test_rejects_inverted_window():
    with pytest.raises(InvalidRangeError):
        SlotSuggester(day_start=600, day_end=600)
