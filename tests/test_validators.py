from __future__ import annotations

from datetime import date

import pytest

from src.activity_tracking.activity_tracking.common.datetime_utils import parse_iso_date
from src.activity_tracking.activity_tracking.common.validators import require_clock, require_positive_int
from src.activity_tracking.activity_tracking.core.exceptions import FormatError, ValidationError


def test_parse_iso_date():
    assert parse_iso_date(" 2026-03-02 ") == date(2026, 3, 2)


@pytest.mark.parametrize("raw", [20260302, None, ["2026-03-02"], "2026-02-30", "02/03/2026"])
def test_parse_iso_date_rejects_non_dates(raw):
    with pytest.raises(FormatError):
        parse_iso_date(raw)


def test_require_clock_checks_format_and_grid():
    assert require_clock(" 07:45 ", "horaInicio") == "07:45"
    with pytest.raises(FormatError):
        require_clock(745, "horaInicio")
    with pytest.raises(FormatError):
        require_clock("07:50", "horaInicio")


def test_require_positive_int_rejects_bools_and_zero():
    assert require_positive_int("3", "recursoId") == 3
    for raw in (True, 0, -1, "x"):
        with pytest.raises(ValidationError):
            require_positive_int(raw, "recursoId")
