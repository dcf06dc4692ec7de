"""ServiceRecord class for completed maintenance events."""
import uuid
from datetime import date
from typing import Optional


class ServiceRecord:
    """A record of maintenance performed on a vehicle."""

    def __init__(
            self,
            service_type: str,
            service_date: str,
            mileage_at_service: int,
            mechanic_name: Optional[str] = None,
            notes: Optional[str] = None,
            total_cost: Optional[float] = None,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.service_type = service_type
        self.service_date = service_date
        self.mileage_at_service = mileage_at_service
        self.mechanic_name = mechanic_name
        self.notes = notes
        self.total_cost = total_cost

    def matches(self, service_type: str) -> bool:
        """Case-insensitive exact match on service type."""
        return self.service_type.lower() == service_type.lower()


def validate_service_record(record: ServiceRecord) -> None:
    """
    Reject records the due computation cannot read back.

    Raises:
        ValueError: describing the first invalid field found.
    """
    if not record.service_type or not record.service_type.strip():
        raise ValueError("Service type is required")
    try:
        date.fromisoformat(record.service_date)
    except (TypeError, ValueError):
        raise ValueError(
            f"Service date must be YYYY-MM-DD, got {record.service_date!r}"
        ) from None
    if record.mileage_at_service is None or record.mileage_at_service < 0:
        raise ValueError(
            f"Mileage at service must be non-negative, got {record.mileage_at_service}"
        )
    if record.total_cost is not None and record.total_cost < 0:
        raise ValueError(f"Total cost cannot be negative, got {record.total_cost}")
