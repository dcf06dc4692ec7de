#!/usr/bin/env python3
"""
Unified CLI for vehicle service reminders.

Commands:
  status          - Show which services are due, overdue, or upcoming
  history         - View service history
  log             - Add a new service record
  update-miles    - Update current vehicle mileage
  reminders       - List configured service reminders
  add-reminder    - Add a service reminder
  delete-reminder - Remove a service reminder
  issues          - List known issues
  add-issue       - Record a new issue
  issue-status    - Move an issue to open, in_progress or resolved
  delete-issue    - Remove an issue
  parts           - List the parts catalog
  inspections     - List the inspection checklist
  diagnostics     - List diagnostic procedures
  videos          - List reference videos
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Dict, List, Optional

from garage import (
    PRIORITIES,
    STATUSES,
    Issue,
    ServiceDue,
    ServiceRecord,
    ServiceReminder,
    Status,
    load_vehicle,
    add_service_record,
    save_current_mileage,
    add_reminder,
    delete_reminder,
    add_issue,
    update_issue_status,
    delete_issue,
    summarize,
    validate_service_record,
)

# Number of reminders highlighted in the status overview
TOP_REMINDERS = 4

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format mileage for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"€{cost:,.2f}" if cost is not None else "-"


def format_time_interval(months: Optional[int]) -> str:
    """Format a reminder time interval ('6 months', '1 year', '2 years')."""
    if not months:
        return "-"
    if months < 12:
        return f"{months} month{'s' if months != 1 else ''}"
    years = months / 12
    if years == 1:
        return "1 year"
    return f"{years:g} years"


def format_remaining(svc: ServiceDue) -> str:
    """Format remaining km, negative when overdue."""
    return f"{svc.miles_until_due:,.0f}"


def format_months_remaining(svc: ServiceDue) -> str:
    """Format remaining whole months ('3mo', '-1mo')."""
    if svc.months_until_due is None:
        return "-"
    return f"{svc.months_until_due}mo"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Status command
# =============================================================================


def make_status_table(services: List[ServiceDue]) -> List[List[str]]:
    """Convert service status list to table rows."""
    rows = []
    for svc in services:
        last_done = "-"
        if svc.last_service_date:
            last_done = f"{svc.last_service_date} @ {format_km(svc.last_service_mileage)}"

        rows.append(
            [
                svc.service_type,
                last_done,
                format_km(svc.next_due_mileage),
                svc.due_date.isoformat() if svc.due_date else "-",
                format_remaining(svc),
                format_months_remaining(svc),
            ]
        )
    return rows


def cmd_status(args):
    """Show which services are due, overdue, or upcoming."""
    vehicle = load_vehicle(args.vehicle_file)
    statuses = vehicle.get_all_service_status()
    summary = summarize(statuses)

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f} km (as of {vehicle.as_of_date})")
    print(f"Reminders: {len(vehicle.reminders)}")
    print(f"History entries: {len(vehicle.history)}")
    if vehicle.issues:
        print(f"Unresolved issues: {vehicle.get_open_issue_count()}")
    print()

    if not statuses:
        print("No service reminders configured.")
        return 0

    if summary.has_any_overdue:
        print(f"OVERDUE SERVICE: {summary.overdue_count} service(s) overdue for maintenance")
        if summary.no_record_count:
            print(f"  {summary.no_record_count} with no service record")
        print()

    print("NEXT UP:")
    for svc in statuses[:TOP_REMINDERS]:
        if svc.is_due:
            print(f"  ! {svc.service_type}: due at {format_km(svc.next_due_mileage)} km")
        else:
            print(
                f"    {svc.service_type}: due at {format_km(svc.next_due_mileage)} km "
                f"({format_km(svc.miles_until_due)} km)"
            )
    print()

    headers = [
        "Service",
        "Last Done",
        "Due (km)",
        "Due (date)",
        "Remaining (km)",
        "Remaining (time)",
    ]

    groups = [
        ("NO SERVICE RECORD:", Status.NO_RECORD),
        ("OVERDUE:", Status.OVERDUE),
        ("OK:", Status.OK),
    ]
    for title, status in groups:
        services = [s for s in statuses if s.status == status]
        if services:
            print(title)
            print(tabulate(make_status_table(services), headers=headers, tablefmt="simple"))
            print()

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(entries: List[ServiceRecord]) -> List[List[str]]:
    """Convert history entries to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                entry.service_date,
                format_km(entry.mileage_at_service),
                entry.service_type,
                entry.mechanic_name or "-",
                format_cost(entry.total_cost),
                truncate(entry.notes),
            ]
        )
    return rows


def cmd_history(args):
    """View service history."""
    vehicle = load_vehicle(args.vehicle_file)

    entries = vehicle.get_history_sorted(sort_by=args.sort, reverse=not args.asc)

    # Apply filters
    if args.type:
        entries = [e for e in entries if args.type.lower() in e.service_type.lower()]

    if args.since:
        entries = [e for e in entries if e.service_date >= args.since]

    total_cost = sum(e.total_cost for e in entries if e.total_cost is not None)
    last_svc = vehicle.last_service

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Current mileage: {vehicle.current_mileage:,.0f} km (as of {vehicle.as_of_date})")
    if last_svc:
        print(f"Last service: {last_svc.service_date} @ {last_svc.mileage_at_service:,.0f} km")
    print(f"Total services: {len(vehicle.history)}")
    if args.type or args.since:
        print(f"Showing: {len(entries)} (filtered)")
    if total_cost > 0:
        print(f"Total cost: {format_cost(total_cost)}")
    print()

    if not entries:
        print("No history entries found.")
        return 0

    headers = ["Date", "Mileage", "Service", "Mechanic", "Cost", "Notes"]
    print(tabulate(make_history_table(entries), headers=headers, tablefmt="simple"))

    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new service record."""
    vehicle = load_vehicle(args.vehicle_file)

    # Reuse the reminder's spelling when the type matches one case-insensitively
    service_type = args.service_type.strip()
    for reminder in vehicle.reminders:
        if reminder.service_type.lower() == service_type.lower():
            service_type = reminder.service_type
            break
    else:
        print(f"Note: no reminder configured for '{service_type}'")

    mileage = args.mileage if args.mileage is not None else vehicle.current_mileage
    record = ServiceRecord(
        service_type=service_type,
        service_date=args.date or date.today().isoformat(),
        mileage_at_service=mileage,
        mechanic_name=args.by,
        notes=args.notes,
        total_cost=args.cost,
    )
    try:
        validate_service_record(record)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Adding service record to {args.vehicle_file}:")
    print(f"  Service: {record.service_type}")
    print(f"  Date:    {record.service_date}")
    print(f"  Mileage: {record.mileage_at_service:,.0f} km")
    if record.mechanic_name:
        print(f"  By:      {record.mechanic_name}")
    if record.notes:
        print(f"  Notes:   {record.notes}")
    if record.total_cost:
        print(f"  Cost:    {format_cost(record.total_cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        add_service_record(args.vehicle_file, record)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print("Entry saved.")

    return 0


# =============================================================================
# Update Miles command
# =============================================================================


def cmd_update_miles(args):
    """Update current vehicle mileage."""
    vehicle = load_vehicle(args.vehicle_file)
    old_mileage = vehicle.current_mileage

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Current mileage: {old_mileage:,.0f} km")
    print(f"New mileage:     {args.mileage:,.0f} km")
    print()

    if args.mileage < old_mileage:
        print("Warning: new mileage is lower than the current reading")

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        save_current_mileage(args.vehicle_file, args.mileage)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print("Mileage updated.")

    return 0


# =============================================================================
# Reminder commands
# =============================================================================


def cmd_reminders(args):
    """List configured service reminders."""
    vehicle = load_vehicle(args.vehicle_file)

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Reminders: {len(vehicle.reminders)}")
    print()

    if not vehicle.reminders:
        print("No service reminders configured.")
        return 0

    rows = []
    for reminder in vehicle.get_reminders_sorted(args.sort, reverse=args.desc):
        rows.append(
            [
                reminder.service_type,
                f"{reminder.mileage_interval:,.0f} km",
                format_time_interval(reminder.time_interval_months),
                format_km(reminder.last_service_mileage),
                reminder.id,
            ]
        )

    headers = ["Service", "Interval", "Time Interval", "Baseline (km)", "ID"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))

    return 0


def cmd_add_reminder(args):
    """Add a service reminder."""
    reminder = ServiceReminder(
        service_type=args.service_type,
        mileage_interval=args.interval,
        last_service_mileage=args.baseline,
        time_interval_months=args.months,
    )
    try:
        add_reminder(args.vehicle_file, reminder)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Added reminder: {reminder.service_type} every {reminder.mileage_interval:,.0f} km")
    if reminder.time_interval_months:
        print(f"  or every {format_time_interval(reminder.time_interval_months)}")
    return 0


def cmd_delete_reminder(args):
    """Remove a service reminder by id."""
    try:
        delete_reminder(args.vehicle_file, args.reminder_id)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1

    print("Reminder deleted.")
    return 0


# =============================================================================
# Issue commands
# =============================================================================


def make_issue_table(issues: List[Issue]) -> List[List[str]]:
    """Convert issues to table rows."""
    return [
        [
            issue.title,
            issue.priority,
            issue.status,
            issue.created_at[:10],
            truncate(issue.description),
            issue.id,
        ]
        for issue in issues
    ]


def cmd_issues(args):
    """List known issues, optionally filtered by status."""
    vehicle = load_vehicle(args.vehicle_file)
    issues = vehicle.get_issues(status=args.status, sort_by=args.sort)

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Issues: {len(vehicle.issues)} ({vehicle.get_open_issue_count()} unresolved)")
    print()

    if not issues:
        print("No issues found.")
        return 0

    headers = ["Issue", "Priority", "Status", "Reported", "Description", "ID"]
    print(tabulate(make_issue_table(issues), headers=headers, tablefmt="simple"))
    return 0


def cmd_add_issue(args):
    """Record a new issue."""
    issue = Issue(
        title=args.title.strip(),
        description=args.description,
        priority=args.priority,
        status=args.status,
    )
    try:
        add_issue(args.vehicle_file, issue)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Added issue: {issue.title} ({issue.priority} priority, {issue.status})")
    return 0


def cmd_issue_status(args):
    """Move an issue through the open / in_progress / resolved workflow."""
    try:
        update_issue_status(args.vehicle_file, args.issue_id, args.status)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1

    print(f"Issue {args.issue_id} is now {args.status}.")
    return 0


def cmd_delete_issue(args):
    try:
        delete_issue(args.vehicle_file, args.issue_id)
    except KeyError as e:
        print(f"Error: {e.args[0]}")
        return 1

    print("Issue deleted.")
    return 0


# =============================================================================
# Catalog commands
# =============================================================================


def print_grouped(title: str, groups: Dict[str, List[List[str]]], headers: List[str]):
    """Print one table per group, groups in alphabetical order."""
    if not groups:
        print(f"No {title} found.")
        return
    for name in sorted(groups):
        print(f"{name.upper()}:")
        print(tabulate(groups[name], headers=headers, tablefmt="simple"))
        print()


def cmd_parts(args):
    """List the parts catalog grouped by category."""
    vehicle = load_vehicle(args.vehicle_file)
    groups: Dict[str, List[List[str]]] = {}
    for part in vehicle.get_parts(search=args.search, category=args.category):
        groups.setdefault(part.category, []).append(
            [
                part.name,
                truncate(part.specifications),
                part.supplier_name or "-",
                format_cost(part.price_eur),
                part.id,
            ]
        )

    print(f"Vehicle: {vehicle.car.name}")
    print()
    print_grouped("parts", groups, ["Part", "Specifications", "Supplier", "Price", "ID"])
    return 0


def cmd_inspections(args):
    """List the inspection checklist grouped by category."""
    vehicle = load_vehicle(args.vehicle_file)
    items = vehicle.get_inspections(category=args.category)
    groups: Dict[str, List[List[str]]] = {}
    for item in items:
        groups.setdefault(item.category, []).append(
            [
                f"! {item.title}" if item.is_priority else item.title,
                truncate(item.specifications),
                truncate(item.description),
                item.id,
            ]
        )

    print(f"Vehicle: {vehicle.car.name}")
    print(f"Inspection items: {len(items)} ({sum(i.is_priority for i in items)} priority)")
    print()
    print_grouped("inspection items", groups, ["Item", "Specifications", "Description", "ID"])
    return 0


def cmd_diagnostics(args):
    """List diagnostic procedures grouped by system."""
    vehicle = load_vehicle(args.vehicle_file)
    groups: Dict[str, List[List[str]]] = {}
    for procedure in vehicle.get_diagnostics(system=args.system):
        related = ", ".join(p.name for p in vehicle.get_related_parts(procedure))
        groups.setdefault(procedure.system, []).append(
            [
                procedure.title,
                len(procedure.step_list),
                truncate(procedure.warnings),
                related or "-",
                procedure.id,
            ]
        )

    print(f"Vehicle: {vehicle.car.name}")
    print()
    print_grouped(
        "diagnostic procedures", groups, ["Procedure", "Steps", "Warnings", "Parts", "ID"]
    )
    return 0


def cmd_videos(args):
    """List reference videos grouped by category."""
    vehicle = load_vehicle(args.vehicle_file)
    groups: Dict[str, List[List[str]]] = {}
    for video in vehicle.get_videos(search=args.search, category=args.category):
        groups.setdefault(video.category, []).append(
            [video.title, video.difficulty_level, video.youtube_link, video.id]
        )

    print(f"Vehicle: {vehicle.car.name}")
    print()
    print_grouped("videos", groups, ["Video", "Difficulty", "Link", "ID"])
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle service reminder tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/golf.yaml status
  %(prog)s vehicles/golf.yaml history --type "oil"
  %(prog)s vehicles/golf.yaml history --since 2024-01-01
  %(prog)s vehicles/golf.yaml reminders --sort mileage_interval
  %(prog)s vehicles/golf.yaml add-reminder "Oil Change" 10000 --months 12
  %(prog)s vehicles/golf.yaml log "Oil Change" --mileage 58000 --by "Garage Schmidt"
  %(prog)s vehicles/golf.yaml update-miles 58000
  %(prog)s vehicles/golf.yaml issues --status open --sort priority
  %(prog)s vehicles/golf.yaml add-issue "Rattle from rear axle" --priority high
  %(prog)s vehicles/golf.yaml parts --search filter
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "status", help="Show which services are due, overdue, or upcoming"
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument(
        "--type",
        type=str,
        help="Filter to service types containing text (case-insensitive)",
    )
    history_parser.add_argument(
        "--since",
        type=str,
        help="Show only entries since date (YYYY-MM-DD)",
    )
    history_parser.add_argument(
        "--sort",
        choices=["date", "mileage", "type", "cost"],
        default="date",
        help="Sort order (default: date)",
    )
    history_parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new service record")
    log_parser.add_argument(
        "service_type",
        type=str,
        help="Service type (e.g., 'Oil Change')",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--mileage",
        type=int,
        help="Mileage at time of service (default: current mileage)",
    )
    log_parser.add_argument(
        "--by",
        type=str,
        help="Mechanic who performed the service (e.g., 'self')",
    )
    log_parser.add_argument(
        "--notes",
        type=str,
        help="Notes about the service",
    )
    log_parser.add_argument(
        "--cost",
        type=float,
        help="Total cost of service",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Update Miles subcommand
    update_miles_parser = subparsers.add_parser(
        "update-miles", help="Update current vehicle mileage"
    )
    update_miles_parser.add_argument(
        "mileage",
        type=int,
        help="Current mileage (km)",
    )
    update_miles_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    # Reminders subcommand
    reminders_parser = subparsers.add_parser(
        "reminders", help="List configured service reminders"
    )
    reminders_parser.add_argument(
        "--sort",
        choices=[
            "service_type",
            "mileage_interval",
            "time_interval_months",
            "last_service_mileage",
        ],
        help="Sort column (default: stored order)",
    )
    reminders_parser.add_argument(
        "--desc",
        action="store_true",
        help="Sort descending",
    )

    # Add Reminder subcommand
    add_reminder_parser = subparsers.add_parser(
        "add-reminder", help="Add a service reminder"
    )
    add_reminder_parser.add_argument(
        "service_type",
        type=str,
        help="Service type (e.g., 'Oil Change')",
    )
    add_reminder_parser.add_argument(
        "interval",
        type=int,
        help="Mileage interval in km",
    )
    add_reminder_parser.add_argument(
        "--months",
        type=int,
        help="Optional time interval in months",
    )
    add_reminder_parser.add_argument(
        "--baseline",
        type=int,
        default=0,
        help="Baseline mileage used until the service is first logged",
    )

    # Delete Reminder subcommand
    delete_reminder_parser = subparsers.add_parser(
        "delete-reminder", help="Remove a service reminder"
    )
    delete_reminder_parser.add_argument(
        "reminder_id",
        type=str,
        help="Reminder ID (see 'reminders')",
    )

    # Issues subcommand
    issues_parser = subparsers.add_parser("issues", help="List known issues")
    issues_parser.add_argument(
        "--status",
        choices=["all"] + list(STATUSES),
        default="all",
        help="Show only issues with this status (default: all)",
    )
    issues_parser.add_argument(
        "--sort",
        choices=["priority", "status"],
        help="Sort order (default: newest first)",
    )

    # Add Issue subcommand
    add_issue_parser = subparsers.add_parser("add-issue", help="Record a new issue")
    add_issue_parser.add_argument("title", type=str, help="Short issue title")
    add_issue_parser.add_argument(
        "--description",
        type=str,
        help="Details about the issue",
    )
    add_issue_parser.add_argument(
        "--priority",
        choices=list(PRIORITIES),
        default="medium",
        help="Priority (default: medium)",
    )
    add_issue_parser.add_argument(
        "--status",
        choices=list(STATUSES),
        default="open",
        help="Initial status (default: open)",
    )

    # Issue Status subcommand
    issue_status_parser = subparsers.add_parser(
        "issue-status", help="Move an issue to open, in_progress or resolved"
    )
    issue_status_parser.add_argument(
        "issue_id", type=str, help="Issue ID (see 'issues')"
    )
    issue_status_parser.add_argument("status", choices=list(STATUSES))

    # Delete Issue subcommand
    delete_issue_parser = subparsers.add_parser("delete-issue", help="Remove an issue")
    delete_issue_parser.add_argument(
        "issue_id", type=str, help="Issue ID (see 'issues')"
    )

    # Catalog subcommands
    parts_parser = subparsers.add_parser("parts", help="List the parts catalog")
    parts_parser.add_argument("--category", type=str, help="Show only this category")
    parts_parser.add_argument(
        "--search", type=str, help="Search name and specifications"
    )

    inspections_parser = subparsers.add_parser(
        "inspections", help="List the inspection checklist"
    )
    inspections_parser.add_argument(
        "--category", type=str, help="Show only this category"
    )

    diagnostics_parser = subparsers.add_parser(
        "diagnostics", help="List diagnostic procedures"
    )
    diagnostics_parser.add_argument("--system", type=str, help="Show only this system")

    videos_parser = subparsers.add_parser("videos", help="List reference videos")
    videos_parser.add_argument("--category", type=str, help="Show only this category")
    videos_parser.add_argument(
        "--search", type=str, help="Search title and description"
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    handlers = {
        "status": cmd_status,
        "history": cmd_history,
        "log": cmd_log,
        "update-miles": cmd_update_miles,
        "reminders": cmd_reminders,
        "add-reminder": cmd_add_reminder,
        "delete-reminder": cmd_delete_reminder,
        "issues": cmd_issues,
        "add-issue": cmd_add_issue,
        "issue-status": cmd_issue_status,
        "delete-issue": cmd_delete_issue,
        "parts": cmd_parts,
        "inspections": cmd_inspections,
        "diagnostics": cmd_diagnostics,
        "videos": cmd_videos,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main() or 0)
