"""ServiceDue and DueSummary dataclasses for calculated reminder status."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, TYPE_CHECKING

from .status import Status

if TYPE_CHECKING:
    from .reminder import ServiceReminder


@dataclass
class ServiceDue:
    """Calculated due information for a reminder. Never persisted."""

    reminder: "ServiceReminder"
    next_due_mileage: int
    is_due: bool
    is_due_by_mileage: bool
    is_due_by_time: bool
    has_no_service_record: bool
    miles_until_due: int
    months_until_due: Optional[int] = None
    due_date: Optional[date] = None
    last_service_date: Optional[str] = None
    last_service_mileage: Optional[int] = None

    @property
    def service_type(self) -> str:
        return self.reminder.service_type

    @property
    def status(self) -> Status:
        if self.has_no_service_record:
            return Status.NO_RECORD
        if self.is_due:
            return Status.OVERDUE
        return Status.OK

    def as_dict(self) -> Dict[str, Any]:
        """Reminder fields plus computed fields, ready for JSON."""
        return {
            "id": self.reminder.id,
            "service_type": self.reminder.service_type,
            "mileage_interval": self.reminder.mileage_interval,
            "last_service_mileage": self.reminder.last_service_mileage,
            "time_interval_months": self.reminder.time_interval_months,
            "next_due_mileage": self.next_due_mileage,
            "is_due": self.is_due,
            "is_due_by_mileage": self.is_due_by_mileage,
            "is_due_by_time": self.is_due_by_time,
            "has_no_service_record": self.has_no_service_record,
            "miles_until_due": self.miles_until_due,
            "months_until_due": self.months_until_due,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "last_service_date": self.last_service_date,
            "status": self.status.name,
        }


@dataclass
class DueSummary:
    """Aggregate counts over a list of ServiceDue."""

    overdue_count: int = 0
    no_record_count: int = 0

    @property
    def has_any_overdue(self) -> bool:
        return self.overdue_count > 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "overdue_count": self.overdue_count,
            "no_record_count": self.no_record_count,
            "has_any_overdue": self.has_any_overdue,
        }
