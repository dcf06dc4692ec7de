"""Issue class for known problems with a vehicle."""
import uuid
from datetime import datetime
from typing import Optional

# Ordered from least to most urgent
PRIORITIES = ("low", "medium", "high")
# Workflow order
STATUSES = ("open", "in_progress", "resolved")


def now_timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


class Issue:
    """A known problem being tracked on a vehicle."""

    def __init__(
            self,
            title: str,
            description: Optional[str] = None,
            priority: str = "medium",
            status: str = "open",
            created_at: Optional[str] = None,
            updated_at: Optional[str] = None,
            id: Optional[str] = None,
    ):
        self.id = id or uuid.uuid4().hex
        self.title = title
        self.description = description
        self.priority = priority
        self.status = status
        self.created_at = created_at or now_timestamp()
        self.updated_at = updated_at or self.created_at

    @property
    def is_resolved(self) -> bool:
        return self.status == "resolved"

    @property
    def priority_rank(self) -> int:
        """Position in PRIORITIES; unknown priorities sort lowest."""
        try:
            return PRIORITIES.index(self.priority)
        except ValueError:
            return -1


def validate_issue(issue: Issue) -> None:
    """
    Reject issues without a title or with an unknown priority or status.

    Raises:
        ValueError: describing the first invalid field found.
    """
    if not issue.title or not issue.title.strip():
        raise ValueError("Please enter a title")
    if issue.priority not in PRIORITIES:
        raise ValueError(
            f"Priority must be one of {', '.join(PRIORITIES)}, got {issue.priority!r}"
        )
    if issue.status not in STATUSES:
        raise ValueError(
            f"Status must be one of {', '.join(STATUSES)}, got {issue.status!r}"
        )
