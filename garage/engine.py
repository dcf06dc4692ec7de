"""
Service reminder due computation.

Given a vehicle's reminders, its service history, its current mileage and
purchase date, produce a prioritized list of ServiceDue. The result is a pure
projection of its inputs: nothing is cached or stored, so callers recompute it
on every read.

A reminder is due when any of these hold:
- no history entry of the same service type exists (no-record reminder)
- current mileage has reached last service mileage + mileage interval
- today has reached last service date (or purchase date) + time interval
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Union

from .calculations import (
    calc_due_date,
    calc_next_due_mileage,
    months_between,
    soonest_metric,
    to_date,
)
from .reminder import ServiceReminder
from .service_due import DueSummary, ServiceDue
from .service_record import ServiceRecord


def find_last_service(
    service_type: str, history: Iterable[ServiceRecord]
) -> Optional[ServiceRecord]:
    """Most recent history entry of a service type (case-insensitive)."""
    matching = [h for h in history if h.matches(service_type)]
    if not matching:
        return None
    return max(matching, key=lambda h: to_date(h.service_date))


def calculate_service_due(
    reminder: ServiceReminder,
    history: Sequence[ServiceRecord],
    current_mileage: int,
    purchase_date: Union[str, date, None] = None,
    today: Optional[date] = None,
) -> ServiceDue:
    """Calculate due status for a single reminder."""
    today = today or date.today()

    last_service = find_last_service(reminder.service_type, history)
    has_no_service_record = last_service is None

    # Mileage dimension
    if last_service is not None:
        last_mileage = last_service.mileage_at_service
    else:
        last_mileage = reminder.last_service_mileage
    next_due_mileage = calc_next_due_mileage(last_mileage, reminder.mileage_interval)
    is_due_by_mileage = has_no_service_record or current_mileage >= next_due_mileage
    miles_until_due = next_due_mileage - current_mileage

    # Time dimension, anchored on the last service or else the purchase date
    is_due_by_time = False
    due_date = None
    months_until_due = None
    if reminder.has_time_interval:
        if last_service is not None:
            start_date = to_date(last_service.service_date)
        else:
            start_date = to_date(purchase_date)
        due_date = calc_due_date(start_date, reminder.time_interval_months)
        if due_date is not None:
            is_due_by_time = has_no_service_record or today >= due_date
            months_until_due = months_between(today, due_date)

    return ServiceDue(
        reminder=reminder,
        next_due_mileage=next_due_mileage,
        is_due=has_no_service_record or is_due_by_mileage or is_due_by_time,
        is_due_by_mileage=is_due_by_mileage,
        is_due_by_time=is_due_by_time,
        has_no_service_record=has_no_service_record,
        miles_until_due=miles_until_due,
        months_until_due=months_until_due,
        due_date=due_date,
        last_service_date=last_service.service_date if last_service else None,
        last_service_mileage=last_service.mileage_at_service if last_service else None,
    )


def priority_key(svc: ServiceDue):
    """Sort key: no-record first, then due, then whichever is soonest."""
    return (
        not svc.has_no_service_record,
        not svc.is_due,
        soonest_metric(svc.miles_until_due, svc.months_until_due),
    )


def compute_due_statuses(
    reminders: Sequence[ServiceReminder],
    history: Sequence[ServiceRecord],
    current_mileage: int,
    purchase_date: Union[str, date, None] = None,
    today: Optional[date] = None,
) -> List[ServiceDue]:
    """
    Calculate and prioritize due status for every reminder.

    Args:
        reminders: Reminders configured for one vehicle.
        history: That vehicle's service history, in any order.
        current_mileage: Current odometer reading (km).
        purchase_date: Fallback anchor for time intervals, ISO string or date.
        today: Reference date, defaults to date.today().

    Returns:
        ServiceDue list in stable priority order.
    """
    today = today or date.today()
    statuses = [
        calculate_service_due(reminder, history, current_mileage, purchase_date, today)
        for reminder in reminders
    ]
    return sorted(statuses, key=priority_key)


def summarize(statuses: Sequence[ServiceDue]) -> DueSummary:
    """Aggregate counts for alert banners."""
    return DueSummary(
        overdue_count=sum(1 for s in statuses if s.is_due),
        no_record_count=sum(1 for s in statuses if s.has_no_service_record),
    )
