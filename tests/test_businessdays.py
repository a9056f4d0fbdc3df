from datetime import date

from studio_resources.utils.businessdays import (
    add_months,
    get_business_dates,
    get_business_days,
    get_month_starts,
    month_end,
)


def test_business_days_inclusive():
    assert get_business_days(date(2024, 1, 1), date(2024, 1, 31)) == 23
    assert get_business_dates(date(2024, 1, 5), date(2024, 1, 8)) == [date(2024, 1, 5), date(2024, 1, 8)]
    assert get_business_dates(date(2024, 1, 8), date(2024, 1, 1)) == []


def test_weekend_only_range_has_no_business_days():
    assert get_business_dates(date(2024, 1, 6), date(2024, 1, 7)) == []
    assert get_business_days(date(2024, 1, 6), date(2024, 1, 6)) == 0


def test_month_helpers():
    assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
    assert add_months(date(2024, 11, 15), 2) == date(2025, 1, 15)
    assert get_month_starts(date(2024, 11, 20), date(2025, 1, 1)) == [
        date(2024, 11, 1),
        date(2024, 12, 1),
        date(2025, 1, 1),
    ]
