"""YAML loading and saving utilities for vehicle data."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from .car import Car
from .reminder import ServiceReminder, validate_reminder
from .service_record import ServiceRecord, validate_service_record
from .issue import Issue, STATUSES, now_timestamp, validate_issue
from .part import Part, validate_part
from .inspection import InspectionItem, validate_inspection
from .diagnostic import DiagnosticProcedure, validate_diagnostic
from .video import Video, validate_video
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

# List sections of a vehicle file and the prefix of fallback ids for
# entries written by hand without one.
SECTIONS = {
    "reminders": "reminder",
    "history": "record",
    "issues": "issue",
    "parts": "part",
    "inspections": "inspection",
    "diagnostics": "diagnostic",
    "videos": "video",
}


def _parse_object(
    dct: Dict[str, Any]
) -> Union[Car, ServiceReminder, ServiceRecord, Vehicle, dict]:
    """Parse dictionary into appropriate object type."""
    # Car object (inside 'vehicle' key)
    if "make" in dct and "model" in dct:
        return Car(
            dct["make"],
            dct["model"],
            dct["year"],
            dct.get("engine"),
            dct.get("transmission"),
            dct.get("purchaseDate"),
            dct.get("notes"),
        )
    # Reminder
    elif "serviceType" in dct and "mileageInterval" in dct:
        return ServiceReminder(
            dct["serviceType"],
            dct["mileageInterval"],
            dct.get("lastServiceMileage"),
            dct.get("timeIntervalMonths"),
            dct.get("id"),
        )
    # Service history entry
    elif "serviceType" in dct and "serviceDate" in dct:
        return ServiceRecord(
            dct["serviceType"],
            dct["serviceDate"],
            dct.get("mileageAtService") or 0,
            dct.get("mechanicName"),
            dct.get("notes"),
            dct.get("totalCost"),
            dct.get("id"),
        )
    # Top-level vehicle object
    elif "vehicle" in dct:
        state = dct.get("state") or {}
        return Vehicle(
            dct["vehicle"],
            dct.get("reminders"),
            dct.get("history"),
            state.get("asOfDate"),
            state.get("currentMileage"),
            issues=[_parse_issue(d) for d in dct.get("issues") or []],
            parts=[_parse_part(d) for d in dct.get("parts") or []],
            inspections=[_parse_inspection(d) for d in dct.get("inspections") or []],
            diagnostics=[_parse_diagnostic(d) for d in dct.get("diagnostics") or []],
            videos=[_parse_video(d) for d in dct.get("videos") or []],
        )
    else:
        # Return dict as-is for unknown structures (state, catalog entries)
        return dct


def _parse_issue(d: Dict[str, Any]) -> Issue:
    return Issue(
        d["title"],
        d.get("description"),
        d.get("priority") or "medium",
        d.get("status") or "open",
        d.get("createdAt"),
        d.get("updatedAt"),
        d.get("id"),
    )


def _parse_part(d: Dict[str, Any]) -> Part:
    return Part(
        d["name"],
        d.get("category") or "Engine",
        d.get("specifications"),
        d.get("supplierName"),
        d.get("purchaseLink"),
        d.get("priceEur"),
        d.get("compatibilityNotes"),
        d.get("id"),
    )


def _parse_inspection(d: Dict[str, Any]) -> InspectionItem:
    return InspectionItem(
        d["title"],
        d.get("category") or "General",
        d.get("description"),
        d.get("specifications"),
        d.get("isPriority", False),
        d.get("id"),
    )


def _parse_diagnostic(d: Dict[str, Any]) -> DiagnosticProcedure:
    return DiagnosticProcedure(
        d["title"],
        d.get("system") or "Engine",
        d.get("description"),
        d.get("steps"),
        d.get("warnings"),
        d.get("relatedPartIds"),
        d.get("id"),
    )


def _parse_video(d: Dict[str, Any]) -> Video:
    return Video(
        d["title"],
        d["youtubeLink"],
        d.get("category") or "General",
        d.get("description"),
        d.get("difficultyLevel") or "Intermediate",
        d.get("id"),
    )


def _assign_missing_ids(data: Dict[str, Any]) -> None:
    """
    Give entries without an id one derived from their list position.

    Loading and editing both go through here, so an id shown for such an
    entry can be used to address it, and the next write persists it.
    """
    for key, prefix in SECTIONS.items():
        for index, item in enumerate(data.get(key) or []):
            if isinstance(item, dict) and not item.get("id"):
                item["id"] = f"{prefix}-{index + 1}"


def load_vehicle(filename: Union[str, Path]) -> Vehicle:
    """Load a vehicle from a YAML file."""
    with open(filename, "rb") as fp:
        raw = yaml.load(fp, Loader=yaml.SafeLoader)
    if isinstance(raw, dict):
        _assign_missing_ids(raw)
    # Unquoted YAML dates load as date objects; default=str makes them ISO
    json_data = json.dumps(raw, indent=4, default=str)
    return json.loads(json_data, object_hook=_parse_object)


def _read_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    _assign_missing_ids(data)
    return data


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _find_index(items: List[Dict[str, Any]], item_id: str, kind: str) -> int:
    for i, item in enumerate(items):
        if item.get("id") == item_id:
            return i
    raise KeyError(f"{kind} '{item_id}' not found")


def _append_item(filename: Union[str, Path], section: str, item: Dict[str, Any]) -> None:
    data = _read_raw(filename)
    if data.get(section) is None:
        data[section] = []
    data[section].append(item)
    _write_raw(filename, data)


def _replace_item(
    filename: Union[str, Path],
    section: str,
    item_id: str,
    kind: str,
    update: Callable[[Dict[str, Any]], Dict[str, Any]],
) -> None:
    """Replace the entry with the given id by update(old entry)."""
    data = _read_raw(filename)
    items = data.get(section) or []
    index = _find_index(items, item_id, kind)
    items[index] = update(items[index])
    _write_raw(filename, data)


def _remove_item(
    filename: Union[str, Path], section: str, item_id: str, kind: str
) -> None:
    data = _read_raw(filename)
    items = data.get(section) or []
    del items[_find_index(items, item_id, kind)]
    _write_raw(filename, data)
    logger.info("Deleted %s %s from %s", kind.lower(), item_id, filename)


def _compact(d: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values for cleaner YAML."""
    return {k: v for k, v in d.items() if v is not None}


def _car_to_dict(car: Car) -> Dict[str, Any]:
    """Serialize a Car to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {"make": car.make, "model": car.model, "year": car.year}
    if car.engine is not None:
        d["engine"] = car.engine
    if car.transmission is not None:
        d["transmission"] = car.transmission
    if car.purchase_date is not None:
        d["purchaseDate"] = car.purchase_date
    if car.notes is not None:
        d["notes"] = car.notes
    return d


def _reminder_to_dict(reminder: ServiceReminder) -> Dict[str, Any]:
    """Serialize a ServiceReminder to the YAML dict format."""
    d: Dict[str, Any] = {
        "id": reminder.id,
        "serviceType": reminder.service_type,
        "mileageInterval": reminder.mileage_interval,
        "lastServiceMileage": reminder.last_service_mileage,
    }
    if reminder.time_interval_months:
        d["timeIntervalMonths"] = reminder.time_interval_months
    return d


def _record_to_dict(record: ServiceRecord) -> Dict[str, Any]:
    """Serialize a ServiceRecord, omitting None values for cleaner YAML."""
    return _compact(
        {
            "id": record.id,
            "serviceType": record.service_type,
            "serviceDate": record.service_date,
            "mileageAtService": record.mileage_at_service,
            "mechanicName": record.mechanic_name,
            "notes": record.notes,
            "totalCost": record.total_cost,
        }
    )


def _issue_to_dict(issue: Issue) -> Dict[str, Any]:
    return _compact(
        {
            "id": issue.id,
            "title": issue.title,
            "description": issue.description,
            "priority": issue.priority,
            "status": issue.status,
            "createdAt": issue.created_at,
            "updatedAt": issue.updated_at,
        }
    )


def _part_to_dict(part: Part) -> Dict[str, Any]:
    return _compact(
        {
            "id": part.id,
            "name": part.name,
            "category": part.category,
            "specifications": part.specifications,
            "supplierName": part.supplier_name,
            "purchaseLink": part.purchase_link,
            "priceEur": part.price_eur,
            "compatibilityNotes": part.compatibility_notes,
        }
    )


def _inspection_to_dict(item: InspectionItem) -> Dict[str, Any]:
    return _compact(
        {
            "id": item.id,
            "title": item.title,
            "category": item.category,
            "description": item.description,
            "specifications": item.specifications,
            "isPriority": item.is_priority,
        }
    )


def _diagnostic_to_dict(procedure: DiagnosticProcedure) -> Dict[str, Any]:
    d = _compact(
        {
            "id": procedure.id,
            "title": procedure.title,
            "system": procedure.system,
            "description": procedure.description,
            "steps": procedure.steps,
            "warnings": procedure.warnings,
        }
    )
    if procedure.related_part_ids:
        d["relatedPartIds"] = list(procedure.related_part_ids)
    return d


def _video_to_dict(video: Video) -> Dict[str, Any]:
    return _compact(
        {
            "id": video.id,
            "title": video.title,
            "youtubeLink": video.youtube_link,
            "category": video.category,
            "description": video.description,
            "difficultyLevel": video.difficulty_level,
        }
    )


# =============================================================================
# Vehicles
# =============================================================================


def create_vehicle(
    filename: Union[str, Path],
    car: Car,
    current_mileage: Optional[int] = None,
    as_of_date: Optional[str] = None,
) -> None:
    """
    Create a new vehicle YAML file with the given car and optional state.

    Initializes with empty reminders and history.
    """
    path = Path(filename)
    if path.exists():
        raise FileExistsError(f"Vehicle file already exists: {path}")

    data: Dict[str, Any] = {
        "vehicle": _car_to_dict(car),
        "state": {"currentMileage": current_mileage or 0},
        "reminders": [],
        "history": [],
    }
    if as_of_date is not None:
        data["state"]["asOfDate"] = as_of_date

    _write_raw(path, data)
    logger.info("Created vehicle %s at %s", car.name, path)


def update_vehicle_meta(
    filename: Union[str, Path],
    car: Optional[Car] = None,
    current_mileage: Optional[int] = None,
    as_of_date: Optional[str] = None,
) -> None:
    """
    Update vehicle info and/or state in a vehicle YAML file.

    Only updates fields that are provided (non-None). Leaves other keys unchanged.
    """
    data = _read_raw(filename)

    if car is not None:
        data["vehicle"] = _car_to_dict(car)

    if current_mileage is not None or as_of_date is not None:
        if data.get("state") is None:
            data["state"] = {}
        if current_mileage is not None:
            data["state"]["currentMileage"] = current_mileage
        if as_of_date is not None:
            data["state"]["asOfDate"] = as_of_date

    _write_raw(filename, data)


def delete_vehicle(filename: Union[str, Path]) -> None:
    """Remove a vehicle YAML file from disk."""
    Path(filename).unlink()
    logger.info("Deleted vehicle file %s", filename)


def save_current_mileage(filename: Union[str, Path], mileage: int) -> None:
    """Update the current mileage in the state section of a vehicle YAML file."""
    if mileage < 0:
        raise ValueError(f"Mileage cannot be negative, got {mileage}")
    update_vehicle_meta(filename, current_mileage=mileage)
    logger.info("Updated mileage of %s to %s", filename, mileage)


# =============================================================================
# Reminders
# =============================================================================


def add_reminder(filename: Union[str, Path], reminder: ServiceReminder) -> None:
    """Validate and append a reminder to a vehicle YAML file."""
    validate_reminder(reminder)
    _append_item(filename, "reminders", _reminder_to_dict(reminder))
    logger.info("Added reminder %r to %s", reminder.service_type, filename)


def update_reminder(
    filename: Union[str, Path], reminder_id: str, reminder: ServiceReminder
) -> None:
    """Replace the reminder with the given id, keeping its id."""
    validate_reminder(reminder)
    reminder.id = reminder_id
    _replace_item(
        filename, "reminders", reminder_id, "Reminder",
        lambda old: _reminder_to_dict(reminder),
    )


def delete_reminder(filename: Union[str, Path], reminder_id: str) -> None:
    """Remove the reminder with the given id."""
    _remove_item(filename, "reminders", reminder_id, "Reminder")


# =============================================================================
# Service history
# =============================================================================


def add_service_record(filename: Union[str, Path], record: ServiceRecord) -> None:
    """
    Validate and append a service record to a vehicle YAML file.

    The stored current mileage is raised to the record's mileage when the
    record is newer than the last known odometer reading.
    """
    validate_service_record(record)
    data = _read_raw(filename)

    if data.get("history") is None:
        data["history"] = []
    data["history"].append(_record_to_dict(record))

    state = data.get("state") or {}
    current = state.get("currentMileage")
    if current is not None and record.mileage_at_service > current:
        state["currentMileage"] = record.mileage_at_service
        data["state"] = state

    _write_raw(filename, data)
    logger.info(
        "Logged %r at %s km to %s",
        record.service_type,
        record.mileage_at_service,
        filename,
    )


def update_service_record(
    filename: Union[str, Path], record_id: str, record: ServiceRecord
) -> None:
    """Replace the service record with the given id, keeping its id."""
    validate_service_record(record)
    record.id = record_id
    _replace_item(
        filename, "history", record_id, "Service record",
        lambda old: _record_to_dict(record),
    )


def delete_service_record(filename: Union[str, Path], record_id: str) -> None:
    """Remove the service record with the given id."""
    _remove_item(filename, "history", record_id, "Service record")


# =============================================================================
# Issues
# =============================================================================


def add_issue(filename: Union[str, Path], issue: Issue) -> None:
    """Validate and append an issue to a vehicle YAML file."""
    validate_issue(issue)
    _append_item(filename, "issues", _issue_to_dict(issue))
    logger.info("Added issue %r to %s", issue.title, filename)


def update_issue(filename: Union[str, Path], issue_id: str, issue: Issue) -> None:
    """Replace the issue with the given id, keeping its id and creation time."""
    validate_issue(issue)
    issue.id = issue_id
    issue.updated_at = now_timestamp()

    def update(old: Dict[str, Any]) -> Dict[str, Any]:
        issue.created_at = old.get("createdAt") or issue.created_at
        return _issue_to_dict(issue)

    _replace_item(filename, "issues", issue_id, "Issue", update)


def update_issue_status(filename: Union[str, Path], issue_id: str, status: str) -> None:
    """Move an issue through the open / in_progress / resolved workflow."""
    if status not in STATUSES:
        raise ValueError(f"Status must be one of {', '.join(STATUSES)}, got {status!r}")

    def update(old: Dict[str, Any]) -> Dict[str, Any]:
        return {**old, "status": status, "updatedAt": now_timestamp()}

    _replace_item(filename, "issues", issue_id, "Issue", update)
    logger.info("Issue %s in %s is now %s", issue_id, filename, status)


def delete_issue(filename: Union[str, Path], issue_id: str) -> None:
    _remove_item(filename, "issues", issue_id, "Issue")


# =============================================================================
# Parts, inspections, diagnostics and videos
# =============================================================================


def add_part(filename: Union[str, Path], part: Part) -> None:
    validate_part(part)
    _append_item(filename, "parts", _part_to_dict(part))


def update_part(filename: Union[str, Path], part_id: str, part: Part) -> None:
    validate_part(part)
    part.id = part_id
    _replace_item(filename, "parts", part_id, "Part", lambda old: _part_to_dict(part))


def delete_part(filename: Union[str, Path], part_id: str) -> None:
    """Remove a part and drop it from diagnostics that reference it."""
    data = _read_raw(filename)
    parts = data.get("parts") or []
    del parts[_find_index(parts, part_id, "Part")]
    for procedure in data.get("diagnostics") or []:
        related = procedure.get("relatedPartIds") or []
        if part_id in related:
            procedure["relatedPartIds"] = [p for p in related if p != part_id]
    _write_raw(filename, data)
    logger.info("Deleted part %s from %s", part_id, filename)


def add_inspection(filename: Union[str, Path], item: InspectionItem) -> None:
    validate_inspection(item)
    _append_item(filename, "inspections", _inspection_to_dict(item))


def update_inspection(
    filename: Union[str, Path], item_id: str, item: InspectionItem
) -> None:
    validate_inspection(item)
    item.id = item_id
    _replace_item(
        filename, "inspections", item_id, "Inspection item",
        lambda old: _inspection_to_dict(item),
    )


def delete_inspection(filename: Union[str, Path], item_id: str) -> None:
    _remove_item(filename, "inspections", item_id, "Inspection item")


def add_diagnostic(filename: Union[str, Path], procedure: DiagnosticProcedure) -> None:
    validate_diagnostic(procedure)
    _append_item(filename, "diagnostics", _diagnostic_to_dict(procedure))


def update_diagnostic(
    filename: Union[str, Path], procedure_id: str, procedure: DiagnosticProcedure
) -> None:
    validate_diagnostic(procedure)
    procedure.id = procedure_id
    _replace_item(
        filename, "diagnostics", procedure_id, "Diagnostic",
        lambda old: _diagnostic_to_dict(procedure),
    )


def delete_diagnostic(filename: Union[str, Path], procedure_id: str) -> None:
    _remove_item(filename, "diagnostics", procedure_id, "Diagnostic")


def add_video(filename: Union[str, Path], video: Video) -> None:
    validate_video(video)
    _append_item(filename, "videos", _video_to_dict(video))


def update_video(filename: Union[str, Path], video_id: str, video: Video) -> None:
    validate_video(video)
    video.id = video_id
    _replace_item(filename, "videos", video_id, "Video", lambda old: _video_to_dict(video))


def delete_video(filename: Union[str, Path], video_id: str) -> None:
    _remove_item(filename, "videos", video_id, "Video")
