"""
Vehicle service reminder tracking.

This package provides data models for tracking vehicle maintenance:
- Status: Urgency levels (NO_RECORD, OVERDUE, OK)
- Car: Vehicle identification
- ServiceReminder: Recurring mileage/time maintenance rules
- ServiceRecord: Completed service history entries
- ServiceDue / DueSummary: Calculated reminder status, never stored
- Issue: Known problems with an open / in_progress / resolved workflow
- Part, InspectionItem, DiagnosticProcedure, Video: Per-vehicle reference catalogs
- Vehicle: Main aggregate combining all data
- compute_due_statuses / summarize: The reminder engine
"""

from .status import Status
from .car import Car
from .reminder import ServiceReminder, validate_reminder
from .service_record import ServiceRecord, validate_service_record
from .issue import Issue, PRIORITIES, STATUSES, validate_issue
from .part import Part, validate_part
from .inspection import InspectionItem, validate_inspection
from .diagnostic import DiagnosticProcedure, validate_diagnostic
from .video import Video, DIFFICULTY_LEVELS, validate_video
from .service_due import ServiceDue, DueSummary
from .vehicle import Vehicle
from .calculations import (
    MONTH_WEIGHT,
    add_months,
    calc_due_date,
    calc_next_due_mileage,
    months_between,
    soonest_metric,
    to_date,
)
from .engine import (
    calculate_service_due,
    compute_due_statuses,
    find_last_service,
    summarize,
)
from .loader import (
    load_vehicle,
    create_vehicle,
    update_vehicle_meta,
    delete_vehicle,
    save_current_mileage,
    add_reminder,
    update_reminder,
    delete_reminder,
    add_service_record,
    update_service_record,
    delete_service_record,
    add_issue,
    update_issue,
    update_issue_status,
    delete_issue,
    add_part,
    update_part,
    delete_part,
    add_inspection,
    update_inspection,
    delete_inspection,
    add_diagnostic,
    update_diagnostic,
    delete_diagnostic,
    add_video,
    update_video,
    delete_video,
)

__all__ = [
    "Status",
    "Car",
    "ServiceReminder",
    "validate_reminder",
    "ServiceRecord",
    "validate_service_record",
    "Issue",
    "PRIORITIES",
    "STATUSES",
    "validate_issue",
    "Part",
    "validate_part",
    "InspectionItem",
    "validate_inspection",
    "DiagnosticProcedure",
    "validate_diagnostic",
    "Video",
    "DIFFICULTY_LEVELS",
    "validate_video",
    "ServiceDue",
    "DueSummary",
    "Vehicle",
    "MONTH_WEIGHT",
    "add_months",
    "calc_due_date",
    "calc_next_due_mileage",
    "months_between",
    "soonest_metric",
    "to_date",
    "calculate_service_due",
    "compute_due_statuses",
    "find_last_service",
    "summarize",
    "load_vehicle",
    "create_vehicle",
    "update_vehicle_meta",
    "delete_vehicle",
    "save_current_mileage",
    "add_reminder",
    "update_reminder",
    "delete_reminder",
    "add_service_record",
    "update_service_record",
    "delete_service_record",
    "add_issue",
    "update_issue",
    "update_issue_status",
    "delete_issue",
    "add_part",
    "update_part",
    "delete_part",
    "add_inspection",
    "update_inspection",
    "delete_inspection",
    "add_diagnostic",
    "update_diagnostic",
    "delete_diagnostic",
    "add_video",
    "update_video",
    "delete_video",
]
