from datetime import date

import pytest

from app.utils.date_utils import add_months, month_diff, month_key, shift_date, start_of_month


@pytest.mark.parametrize(
    "year, month, n, expected",
    [
        (2024, 1, 1, (2024, 2)),
        (2024, 12, 1, (2025, 1)),
        (2024, 3, -3, (2023, 12)),
        (2024, 7, 18, (2026, 1)),
    ],
)
def test_add_months(year, month, n, expected):
    assert add_months(year, month, n) == expected


def test_shift_date_clamps_day():
    assert shift_date(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert shift_date(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert shift_date(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert shift_date(date(2024, 7, 15), 0) == date(2024, 7, 15)


def test_month_helpers():
    assert start_of_month(date(2024, 7, 15)) == date(2024, 7, 1)
    assert month_diff(date(2024, 7, 31), date(2024, 8, 1)) == 1
    assert month_diff(date(2024, 7, 1), date(2023, 7, 1)) == -12
    assert month_key(date(2024, 3, 9)) == "2024-03"
