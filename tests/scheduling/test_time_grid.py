from __future__ import annotations

from datetime import date

import pytest

from src.activity_tracking.activity_tracking.core.exceptions import FormatError
from src.activity_tracking.activity_tracking.scheduling.time_grid import (
    is_grid_aligned,
    offset_minutes,
    snap_up,
    split_minutes,
    to_clock,
    to_minutes,
)


def test_to_minutes_parses_wall_clock():
    assert to_minutes("00:00") == 0
    assert to_minutes("08:15") == 495
    assert to_minutes("23:59") == 1439


@pytest.mark.parametrize("raw", ["24:00", "8:00", "08:60", "0800", "", None, "08:00:00"])
def test_to_minutes_rejects_malformed(raw):
    with pytest.raises(FormatError):
        to_minutes(raw)


def test_to_clock_wraps_past_midnight():
    assert to_clock(495) == "08:15"
    assert to_clock(1440) == "00:00"
    assert to_clock(1530) == "01:30"


def test_snap_up_keeps_grid_values_and_rounds_others_up():
    assert snap_up(600) == 600
    assert snap_up(601) == 615
    assert snap_up(614) == 615
    assert snap_up(0) == 0


def test_is_grid_aligned():
    assert is_grid_aligned("07:45")
    assert not is_grid_aligned("07:50")


def test_offset_and_split_cover_the_next_day():
    d = date(2026, 3, 2)
    minutes = offset_minutes(d, date(2026, 3, 3), "02:00")
    assert minutes == 1440 + 120
    assert split_minutes(d, minutes) == (date(2026, 3, 3), "02:00")
    assert split_minutes(d, 600) == (d, "10:00")
