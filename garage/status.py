"""Status enum for reminder urgency levels."""

from enum import Enum


class Status(Enum):
    """Reminder status categories. Lower value = more urgent."""

    NO_RECORD = 1  # Never serviced, always due
    OVERDUE = 2
    OK = 3
