"""ServiceReminder class for recurring maintenance rules."""
import uuid
from typing import Optional


class ServiceReminder:
    """A recurring maintenance rule for one vehicle."""

    def __init__(
            self,
            service_type: str,
            mileage_interval: int,
            last_service_mileage: int = 0,
            time_interval_months: Optional[int] = None,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.service_type = service_type
        self.mileage_interval = mileage_interval
        self.last_service_mileage = last_service_mileage or 0
        # 0 from the reminder form means "no time rule"
        self.time_interval_months = time_interval_months or None

    @property
    def has_time_interval(self) -> bool:
        return bool(self.time_interval_months)


def validate_reminder(reminder: ServiceReminder) -> None:
    """
    Reject reminders the due computation is not defined for.

    Raises:
        ValueError: describing the first invalid field found.
    """
    if not reminder.service_type or not reminder.service_type.strip():
        raise ValueError("Service type is required")
    if reminder.mileage_interval is None or reminder.mileage_interval <= 0:
        raise ValueError(
            f"Mileage interval must be positive, got {reminder.mileage_interval}"
        )
    if reminder.last_service_mileage < 0:
        raise ValueError(
            f"Last service mileage cannot be negative, got {reminder.last_service_mileage}"
        )
    if reminder.time_interval_months is not None and reminder.time_interval_months < 0:
        raise ValueError(
            f"Time interval cannot be negative, got {reminder.time_interval_months}"
        )
