from datetime import date, datetime, time

import pytest

from hr_workflow.common.datetime_utils import coerce_date, coerce_time, format_work_minutes, minutes_between
from hr_workflow.common.validators import require_decimal, require_non_negative
from hr_workflow.common.values import DateRange
from hr_workflow.core.exceptions import ValidationError


def test_date_range_is_inclusive():
    r = DateRange.of("2026-02-01", "2026-02-28")

    assert r.days == 28
    assert r.contains(date(2026, 2, 1)) and r.contains(date(2026, 2, 28))
    assert not r.contains(date(2026, 3, 1))


def test_date_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        DateRange(date(2026, 2, 2), date(2026, 2, 1))


def test_coerce_date_variants():
    assert coerce_date(datetime(2026, 2, 2, 10, 0), "d") == date(2026, 2, 2)
    assert coerce_date("2026-02-02T10:00:00", "d") == date(2026, 2, 2)
    with pytest.raises(ValidationError):
        coerce_date("", "d")


def test_coerce_time_variants():
    assert coerce_time("09:05", "t") == time(9, 5)
    assert coerce_time("09:05:30", "t") == time(9, 5, 30)
    assert coerce_time("  ", "t") is None
    with pytest.raises(ValidationError):
        coerce_time(905, "t")


def test_minutes_between_and_format():
    assert minutes_between(time(9, 0), time(17, 29, 59)) == 509
    assert format_work_minutes(509) == "8h 29m"
    assert format_work_minutes(None) == "0h 0m"


@pytest.mark.parametrize("value", [True, "1e", "Infinity", None])
def test_require_decimal_rejects(value):
    with pytest.raises(ValidationError):
        require_decimal(value, "amount")


def test_require_non_negative_accepts_zero():
    assert require_non_negative("0.00", "amount") == 0
