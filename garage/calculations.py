"""Helper functions for service due calculations."""

import math
from datetime import date
from dateutil.relativedelta import relativedelta
from typing import Optional, Union

# Weight that puts months on the same scale as kilometres when picking
# whichever dimension is closer to due.
MONTH_WEIGHT = 1000


def to_date(value: Union[str, date, None]) -> Optional[date]:
    """Accept an ISO date string or a date; None passes through."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def add_months(start: date, months: int) -> date:
    """
    Add calendar months to a date.

    Uses relativedelta, so the day of month is clamped to the last day of the
    target month: Jan 31 + 1 month is Feb 28 (Feb 29 in leap years).
    """
    return start + relativedelta(months=int(months))


def calc_next_due_mileage(last_mileage: int, interval: int) -> int:
    """Next due mileage: last + interval, no rounding."""
    return last_mileage + interval


def calc_due_date(
    start_date: Optional[date], interval_months: Optional[int]
) -> Optional[date]:
    """Calculate next due date: start + interval months."""
    if not interval_months or start_date is None:
        return None
    return add_months(start_date, interval_months)


def months_between(today: date, due: date) -> int:
    """Whole calendar months from today to due, ignoring the day of month."""
    return (due.year - today.year) * 12 + (due.month - today.month)


def soonest_metric(
    miles_until_due: Optional[int], months_until_due: Optional[int]
) -> float:
    """
    Closeness to due across both dimensions, smaller is sooner.

    Only positive remaining values count; months are scaled by MONTH_WEIGHT.
    """
    by_miles = (
        miles_until_due
        if miles_until_due is not None and miles_until_due > 0
        else math.inf
    )
    by_months = (
        months_until_due * MONTH_WEIGHT
        if months_until_due is not None and months_until_due > 0
        else math.inf
    )
    return min(by_miles, by_months)
