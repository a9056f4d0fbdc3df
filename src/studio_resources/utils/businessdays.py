import logging
from calendar import monthrange
from datetime import date
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)


def get_business_dates(start: date, end: date) -> List[date]:
    """
    Lists the business days (weekdays) between start and end (inclusive), in order.

    An inverted range yields an empty list.
    """
    if end < start:
        return []
    bdays = pd.bdate_range(start, end)
    logger.debug(f"Business days between {start} and {end}: {len(bdays)}")
    return [ts.date() for ts in bdays]


def get_business_days(start: date, end: date) -> int:
    """
    Calculates the number of business days between start and end (inclusive).
    """
    return len(get_business_dates(start, end))


def month_start(d: date) -> date:
    return d.replace(day=1)


def month_end(d: date) -> date:
    return d.replace(day=monthrange(d.year, d.month)[1])


def add_months(d: date, months: int) -> date:
    """
    Shifts d by a number of calendar months, clamping the day to the target month.
    """
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(d.day, monthrange(year, month)[1]))


def get_month_starts(start: date, end: date) -> List[date]:
    """
    First day of every calendar month intersecting [start, end], chronologically.
    """
    if end < start:
        return []
    return [ts.date() for ts in pd.date_range(month_start(start), end, freq="MS")]
