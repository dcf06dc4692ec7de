"""Flask JSON API for vehicle service reminders."""

import os
from datetime import date
from pathlib import Path

from flask import Flask, abort, jsonify, request

from garage.loader import (
    load_vehicle,
    add_reminder,
    update_reminder,
    delete_reminder,
    add_service_record,
    delete_service_record,
    save_current_mileage,
    add_issue,
    update_issue,
    update_issue_status,
    delete_issue,
)
from garage.reminder import ServiceReminder
from garage.service_record import ServiceRecord
from garage.issue import Issue
from garage.engine import summarize

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Directory of vehicle YAML files (default: vehicles/ in the project root)
app.config["VEHICLES_DIR"] = Path(
    os.environ.get("GARAGE_VEHICLES_DIR", Path(__file__).parent.parent / "vehicles")
)


def get_vehicle_files():
    """Get all vehicle YAML files."""
    return sorted(Path(app.config["VEHICLES_DIR"]).glob("*.yaml"))


def get_vehicle_path(vehicle_id: str) -> Path:
    """Get full path for a vehicle ID, 404 if it does not exist."""
    path = Path(app.config["VEHICLES_DIR"]) / f"{vehicle_id}.yaml"
    if not path.exists():
        abort(404, description=f"Vehicle '{vehicle_id}' not found")
    return path


def vehicle_to_dict(vehicle_id: str, vehicle) -> dict:
    car = vehicle.car
    return {
        "id": vehicle_id,
        "name": car.name,
        "make": car.make,
        "model": car.model,
        "year": car.year,
        "engine": car.engine,
        "transmission": car.transmission,
        "purchase_date": car.purchase_date,
        "notes": car.notes,
        "current_mileage": vehicle.current_mileage,
        "as_of_date": vehicle.as_of_date,
    }


def reminder_to_dict(reminder: ServiceReminder) -> dict:
    return {
        "id": reminder.id,
        "service_type": reminder.service_type,
        "mileage_interval": reminder.mileage_interval,
        "last_service_mileage": reminder.last_service_mileage,
        "time_interval_months": reminder.time_interval_months,
    }


def record_to_dict(record: ServiceRecord) -> dict:
    return {
        "id": record.id,
        "service_type": record.service_type,
        "service_date": record.service_date,
        "mileage_at_service": record.mileage_at_service,
        "mechanic_name": record.mechanic_name,
        "notes": record.notes,
        "total_cost": record.total_cost,
    }


def issue_to_dict(issue: Issue) -> dict:
    return {
        "id": issue.id,
        "title": issue.title,
        "description": issue.description,
        "priority": issue.priority,
        "status": issue.status,
        "created_at": issue.created_at,
        "updated_at": issue.updated_at,
    }


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description="Expected a JSON object")
    return data


def _int_field(data: dict, name: str, default=None):
    value = data.get(name, default)
    if value is None or value == "":
        return default
    # JSON true/false and fractional numbers are not whole kilometres or months
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        abort(400, description=f"Invalid {name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        abort(400, description=f"Invalid {name}: {value!r}")


def reminder_from_json(data: dict) -> ServiceReminder:
    return ServiceReminder(
        service_type=(data.get("service_type") or "").strip(),
        mileage_interval=_int_field(data, "mileage_interval"),
        last_service_mileage=_int_field(data, "last_service_mileage", 0),
        time_interval_months=_int_field(data, "time_interval_months"),
    )


@app.errorhandler(400)
@app.errorhandler(404)
def json_error(error):
    return jsonify({"error": error.description}), error.code


@app.route("/api/vehicles")
def list_vehicles():
    """All vehicles with their overdue summary."""
    vehicles = []
    for path in get_vehicle_files():
        vehicle = load_vehicle(path)
        entry = vehicle_to_dict(path.stem, vehicle)
        entry["summary"] = vehicle.get_service_summary().as_dict()
        vehicles.append(entry)
    return jsonify(vehicles)


@app.route("/api/vehicles/<vehicle_id>")
def vehicle_detail(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    return jsonify(vehicle_to_dict(vehicle_id, vehicle))


@app.route("/api/vehicles/<vehicle_id>/status")
def vehicle_status(vehicle_id: str):
    """Prioritized due statuses plus aggregate counts."""
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    statuses = vehicle.get_all_service_status()
    return jsonify(
        {
            "vehicle_id": vehicle_id,
            "current_mileage": vehicle.current_mileage,
            "as_of_date": vehicle.as_of_date,
            "statuses": [s.as_dict() for s in statuses],
            "summary": summarize(statuses).as_dict(),
        }
    )


@app.route("/api/vehicles/<vehicle_id>/reminders", methods=["GET"])
def list_reminders(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    sort_by = request.args.get("sort") or None
    reverse = request.args.get("direction", "asc").lower() == "desc"
    reminders = vehicle.get_reminders_sorted(sort_by, reverse=reverse)
    return jsonify([reminder_to_dict(r) for r in reminders])


@app.route("/api/vehicles/<vehicle_id>/reminders", methods=["POST"])
def create_reminder(vehicle_id: str):
    path = get_vehicle_path(vehicle_id)
    reminder = reminder_from_json(_json_body())
    try:
        add_reminder(path, reminder)
    except ValueError as e:
        abort(400, description=str(e))
    app.logger.info("Added reminder %s to %s", reminder.service_type, vehicle_id)
    return jsonify(reminder_to_dict(reminder)), 201


@app.route("/api/vehicles/<vehicle_id>/reminders/<reminder_id>", methods=["PUT"])
def edit_reminder(vehicle_id: str, reminder_id: str):
    path = get_vehicle_path(vehicle_id)
    reminder = reminder_from_json(_json_body())
    try:
        update_reminder(path, reminder_id, reminder)
    except KeyError as e:
        abort(404, description=e.args[0])
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify(reminder_to_dict(reminder))


@app.route("/api/vehicles/<vehicle_id>/reminders/<reminder_id>", methods=["DELETE"])
def remove_reminder(vehicle_id: str, reminder_id: str):
    path = get_vehicle_path(vehicle_id)
    try:
        delete_reminder(path, reminder_id)
    except KeyError as e:
        abort(404, description=e.args[0])
    return "", 204


@app.route("/api/vehicles/<vehicle_id>/history", methods=["GET"])
def list_history(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    history = vehicle.get_history_sorted(sort_by="date", reverse=True)
    return jsonify([record_to_dict(h) for h in history])


@app.route("/api/vehicles/<vehicle_id>/history", methods=["POST"])
def log_service(vehicle_id: str):
    """Add a service record; also raises the vehicle's current mileage."""
    path = get_vehicle_path(vehicle_id)
    data = _json_body()

    service_type = (data.get("service_type") or "").strip()
    if not service_type:
        abort(400, description="Please select a service type")

    service_date = data.get("service_date") or date.today().isoformat()
    try:
        date.fromisoformat(service_date)
    except (TypeError, ValueError):
        abort(400, description=f"Invalid service_date: {service_date!r}")

    mileage = _int_field(data, "mileage_at_service")
    if mileage is None:
        mileage = load_vehicle(path).current_mileage

    cost = data.get("total_cost")
    try:
        cost_val = float(cost) if cost not in (None, "") else None
    except (TypeError, ValueError):
        abort(400, description=f"Invalid total_cost: {cost!r}")

    record = ServiceRecord(
        service_type=service_type,
        service_date=service_date,
        mileage_at_service=mileage,
        mechanic_name=data.get("mechanic_name") or None,
        notes=data.get("notes") or None,
        total_cost=cost_val,
    )
    try:
        add_service_record(path, record)
    except ValueError as e:
        abort(400, description=str(e))
    app.logger.info("Logged service %s for %s", service_type, vehicle_id)
    return jsonify(record_to_dict(record)), 201


@app.route("/api/vehicles/<vehicle_id>/history/<record_id>", methods=["DELETE"])
def remove_service_record(vehicle_id: str, record_id: str):
    path = get_vehicle_path(vehicle_id)
    try:
        delete_service_record(path, record_id)
    except KeyError as e:
        abort(404, description=e.args[0])
    return "", 204


@app.route("/api/vehicles/<vehicle_id>/mileage", methods=["POST"])
def update_mileage(vehicle_id: str):
    path = get_vehicle_path(vehicle_id)
    mileage = _int_field(_json_body(), "mileage")
    if mileage is None:
        abort(400, description="Please enter mileage")
    try:
        save_current_mileage(path, mileage)
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify(vehicle_to_dict(vehicle_id, load_vehicle(path)))


@app.route("/api/vehicles/<vehicle_id>/issues", methods=["GET"])
def list_issues(vehicle_id: str):
    """Issues newest first; ?status= filters, ?sort=priority|status reorders."""
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    issues = vehicle.get_issues(
        status=request.args.get("status") or None,
        sort_by=request.args.get("sort") or None,
    )
    return jsonify([issue_to_dict(i) for i in issues])


def issue_from_json(data: dict) -> Issue:
    return Issue(
        title=(data.get("title") or "").strip(),
        description=data.get("description") or None,
        priority=data.get("priority") or "medium",
        status=data.get("status") or "open",
    )


@app.route("/api/vehicles/<vehicle_id>/issues", methods=["POST"])
def create_issue(vehicle_id: str):
    path = get_vehicle_path(vehicle_id)
    issue = issue_from_json(_json_body())
    try:
        add_issue(path, issue)
    except ValueError as e:
        abort(400, description=str(e))
    app.logger.info("Added issue %s to %s", issue.title, vehicle_id)
    return jsonify(issue_to_dict(issue)), 201


@app.route("/api/vehicles/<vehicle_id>/issues/<issue_id>", methods=["PUT"])
def edit_issue(vehicle_id: str, issue_id: str):
    path = get_vehicle_path(vehicle_id)
    issue = issue_from_json(_json_body())
    try:
        update_issue(path, issue_id, issue)
    except KeyError as e:
        abort(404, description=e.args[0])
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify(issue_to_dict(issue))


@app.route("/api/vehicles/<vehicle_id>/issues/<issue_id>/status", methods=["POST"])
def change_issue_status(vehicle_id: str, issue_id: str):
    path = get_vehicle_path(vehicle_id)
    status = _json_body().get("status")
    try:
        update_issue_status(path, issue_id, status)
    except KeyError as e:
        abort(404, description=e.args[0])
    except ValueError as e:
        abort(400, description=str(e))
    return jsonify(issue_to_dict(load_vehicle(path).get_issue(issue_id)))


@app.route("/api/vehicles/<vehicle_id>/issues/<issue_id>", methods=["DELETE"])
def remove_issue(vehicle_id: str, issue_id: str):
    path = get_vehicle_path(vehicle_id)
    try:
        delete_issue(path, issue_id)
    except KeyError as e:
        abort(404, description=e.args[0])
    return "", 204


@app.route("/api/vehicles/<vehicle_id>/parts")
def list_parts(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    parts = vehicle.get_parts(
        search=request.args.get("search") or None,
        category=request.args.get("category") or None,
    )
    return jsonify(
        [
            {
                "id": p.id,
                "name": p.name,
                "category": p.category,
                "specifications": p.specifications,
                "supplier_name": p.supplier_name,
                "purchase_link": p.purchase_link,
                "price_eur": p.price_eur,
                "compatibility_notes": p.compatibility_notes,
            }
            for p in parts
        ]
    )


@app.route("/api/vehicles/<vehicle_id>/inspections")
def list_inspections(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    items = vehicle.get_inspections(category=request.args.get("category") or None)
    return jsonify(
        [
            {
                "id": i.id,
                "title": i.title,
                "category": i.category,
                "description": i.description,
                "specifications": i.specifications,
                "is_priority": i.is_priority,
            }
            for i in items
        ]
    )


@app.route("/api/vehicles/<vehicle_id>/diagnostics")
def list_diagnostics(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    procedures = vehicle.get_diagnostics(system=request.args.get("system") or None)
    return jsonify(
        [
            {
                "id": d.id,
                "title": d.title,
                "system": d.system,
                "description": d.description,
                "steps": d.step_list,
                "warnings": d.warnings,
                "related_parts": [p.name for p in vehicle.get_related_parts(d)],
            }
            for d in procedures
        ]
    )


@app.route("/api/vehicles/<vehicle_id>/videos")
def list_videos(vehicle_id: str):
    vehicle = load_vehicle(get_vehicle_path(vehicle_id))
    videos = vehicle.get_videos(
        search=request.args.get("search") or None,
        category=request.args.get("category") or None,
    )
    return jsonify(
        [
            {
                "id": v.id,
                "title": v.title,
                "category": v.category,
                "youtube_link": v.youtube_link,
                "description": v.description,
                "difficulty_level": v.difficulty_level,
            }
            for v in videos
        ]
    )


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
