from datetime import date

import pytest

from src.worklog.worklog.common.date_ranges import DateWindow, days_ago, resolve_range
from src.worklog.worklog.core.enums import DateRange
from src.worklog.worklog.core.exceptions import ValidationError

TODAY = date(2024, 1, 15)


@pytest.mark.parametrize(
    "period, start",
    [
        ("today", date(2024, 1, 15)),
        ("week", date(2024, 1, 8)),
        ("month", date(2023, 12, 16)),
        ("all", date(2020, 1, 1)),
        (DateRange.WEEK, date(2024, 1, 8)),
    ],
)
def test_symbolic_periods(period, start):
    window = resolve_range(period, today=TODAY)
    assert window == DateWindow(start=start, end=None)


def test_unknown_period_falls_back_to_all_time():
    assert resolve_range("fortnight", today=TODAY).start == date(2020, 1, 1)


def test_custom_range_uses_both_bounds():
    window = resolve_range("custom", today=TODAY, start="2024-01-01", end="2024-01-10")
    assert window == DateWindow(start=date(2024, 1, 1), end=date(2024, 1, 10))


def test_custom_range_requires_start_and_end():
    with pytest.raises(ValidationError):
        resolve_range("custom", today=TODAY, start="2024-01-01")


def test_custom_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        resolve_range("custom", today=TODAY, start="2024-01-10", end="2024-01-01")


def test_days_ago():
    assert days_ago(30, today=TODAY) == date(2023, 12, 16)
    assert days_ago(0, today=TODAY) == TODAY
