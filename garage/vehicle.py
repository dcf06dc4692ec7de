"""Vehicle class - the main aggregate for vehicle data and reminder status."""

from datetime import date
from typing import List, Optional

from .car import Car
from .reminder import ServiceReminder
from .service_record import ServiceRecord
from .issue import Issue, STATUSES
from .part import Part
from .inspection import InspectionItem
from .diagnostic import DiagnosticProcedure
from .video import Video
from .service_due import DueSummary, ServiceDue
from .calculations import to_date
from .engine import compute_due_statuses, find_last_service, summarize


class Vehicle:
    """Complete vehicle record with car info, reminders, and service history."""

    def __init__(
        self,
        car: Car,
        reminders: Optional[List[ServiceReminder]] = None,
        history: Optional[List[ServiceRecord]] = None,
        state_as_of_date: Optional[str] = None,
        state_current_mileage: Optional[int] = None,
        issues: Optional[List[Issue]] = None,
        parts: Optional[List[Part]] = None,
        inspections: Optional[List[InspectionItem]] = None,
        diagnostics: Optional[List[DiagnosticProcedure]] = None,
        videos: Optional[List[Video]] = None,
    ):
        self.car = car
        self.reminders = reminders or []
        self.history = history or []
        self.issues = issues or []
        self.parts = parts or []
        self.inspections = inspections or []
        self.diagnostics = diagnostics or []
        self.videos = videos or []
        self._state_as_of_date = state_as_of_date
        self._state_current_mileage = state_current_mileage

    @property
    def current_mileage(self) -> int:
        """Current mileage, auto-computed from history if not explicitly set."""
        if self._state_current_mileage is not None:
            return self._state_current_mileage
        if self.history:
            return max(h.mileage_at_service or 0 for h in self.history)
        return 0

    @property
    def as_of_date(self) -> str:
        """Date of current state, defaults to today."""
        if self._state_as_of_date:
            return self._state_as_of_date
        return date.today().isoformat()

    @property
    def last_service(self) -> Optional[ServiceRecord]:
        """Get the most recent service entry overall."""
        if not self.history:
            return None
        return max(
            self.history,
            key=lambda h: (to_date(h.service_date), h.mileage_at_service or 0),
        )

    def get_reminder(self, reminder_id: str) -> Optional[ServiceReminder]:
        for reminder in self.reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def get_service_record(self, record_id: str) -> Optional[ServiceRecord]:
        for record in self.history:
            if record.id == record_id:
                return record
        return None

    def get_history_for_type(self, service_type: str) -> List[ServiceRecord]:
        """Get all history entries for a service type (case-insensitive)."""
        return [h for h in self.history if h.matches(service_type)]

    def get_last_service(self, service_type: str) -> Optional[ServiceRecord]:
        """Get the most recent service of a type."""
        return find_last_service(service_type, self.history)

    def get_history_sorted(
        self, sort_by: str = "date", reverse: bool = True
    ) -> List[ServiceRecord]:
        """
        Get history entries sorted by specified field.

        Args:
            sort_by: "date", "mileage", "type" or "cost"
            reverse: If True, newest/highest first (default)
        """
        if sort_by == "date":
            return sorted(
                self.history, key=lambda h: to_date(h.service_date), reverse=reverse
            )
        elif sort_by == "mileage":
            return sorted(
                self.history, key=lambda h: h.mileage_at_service or 0, reverse=reverse
            )
        elif sort_by == "type":
            return sorted(
                self.history,
                key=lambda h: (h.service_type.lower(), to_date(h.service_date)),
                reverse=reverse,
            )
        elif sort_by == "cost":
            return sorted(
                self.history, key=lambda h: h.total_cost or 0, reverse=reverse
            )
        return list(self.history)

    def get_reminders_sorted(
        self, sort_by: Optional[str] = None, reverse: bool = False
    ) -> List[ServiceReminder]:
        """
        Get reminders sorted by a column.

        Args:
            sort_by: "service_type", "mileage_interval", "time_interval_months"
                or "last_service_mileage"; None keeps stored order
            reverse: If True, descending
        """
        keys = {
            "service_type": lambda r: r.service_type.lower(),
            "mileage_interval": lambda r: r.mileage_interval,
            "time_interval_months": lambda r: r.time_interval_months or 0,
            "last_service_mileage": lambda r: r.last_service_mileage,
        }
        if sort_by not in keys:
            return list(self.reminders)
        return sorted(self.reminders, key=keys[sort_by], reverse=reverse)

    def get_all_service_status(self) -> List[ServiceDue]:
        """Calculate prioritized due status for all reminders."""
        return compute_due_statuses(
            self.reminders,
            self.history,
            self.current_mileage,
            self.car.purchase_date,
            today=date.fromisoformat(self.as_of_date),
        )

    def get_service_summary(self) -> DueSummary:
        return summarize(self.get_all_service_status())

    # =========================================================================
    # Issues and reference catalogs
    # =========================================================================

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        for issue in self.issues:
            if issue.id == issue_id:
                return issue
        return None

    def get_issues(
        self, status: Optional[str] = None, sort_by: Optional[str] = None
    ) -> List[Issue]:
        """
        Get issues, newest first, optionally filtered by workflow status.

        Args:
            status: "open", "in_progress" or "resolved"; None or "all" for every issue
            sort_by: "priority" (most urgent first) or "status" (workflow order);
                None keeps newest first
        """
        issues = sorted(self.issues, key=lambda i: i.created_at, reverse=True)
        if status and status != "all":
            issues = [i for i in issues if i.status == status]
        if sort_by == "priority":
            issues.sort(key=lambda i: i.priority_rank, reverse=True)
        elif sort_by == "status":
            order = {s: n for n, s in enumerate(STATUSES)}
            issues.sort(key=lambda i: order.get(i.status, len(STATUSES)))
        return issues

    def get_open_issue_count(self) -> int:
        return sum(1 for i in self.issues if not i.is_resolved)

    def get_parts(
        self, search: Optional[str] = None, category: Optional[str] = None
    ) -> List[Part]:
        """Parts ordered by category, filtered by search text and category."""
        parts = sorted(self.parts, key=lambda p: p.category.lower())
        if search:
            parts = [p for p in parts if p.matches_search(search)]
        if category:
            parts = [p for p in parts if p.category == category]
        return parts

    def get_inspections(self, category: Optional[str] = None) -> List[InspectionItem]:
        """Inspection items ordered by category, priority items first within one."""
        items = sorted(
            self.inspections, key=lambda i: (i.category.lower(), not i.is_priority)
        )
        if category:
            items = [i for i in items if i.category == category]
        return items

    def get_diagnostics(self, system: Optional[str] = None) -> List[DiagnosticProcedure]:
        procedures = sorted(self.diagnostics, key=lambda d: d.system.lower())
        if system:
            procedures = [d for d in procedures if d.system == system]
        return procedures

    def get_related_parts(self, procedure: DiagnosticProcedure) -> List[Part]:
        """Parts referenced by a diagnostic procedure; unknown ids are skipped."""
        by_id = {p.id: p for p in self.parts}
        return [by_id[pid] for pid in procedure.related_part_ids if pid in by_id]

    def get_videos(
        self, search: Optional[str] = None, category: Optional[str] = None
    ) -> List[Video]:
        videos = sorted(self.videos, key=lambda v: v.category.lower())
        if search:
            videos = [v for v in videos if v.matches_search(search)]
        if category:
            videos = [v for v in videos if v.category == category]
        return videos
