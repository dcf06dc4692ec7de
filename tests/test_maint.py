#!/usr/bin/env python3
"""Tests for maint CLI formatting, table helpers and commands."""

from datetime import date

import pytest

from garage import ServiceDue, ServiceRecord, ServiceReminder, load_vehicle
from maint import (
    format_km,
    format_cost,
    format_time_interval,
    format_remaining,
    format_months_remaining,
    truncate,
    make_status_table,
    make_history_table,
    main,
)

VEHICLE_YAML = """
vehicle:
  make: Volkswagen
  model: Golf
  year: 2014
  purchaseDate: '2019-04-12'
state:
  currentMileage: 61000
  asOfDate: '2025-06-15'
reminders:
  - id: oil
    serviceType: Oil Change
    mileageInterval: 10000
    timeIntervalMonths: 6
  - id: cabin
    serviceType: Cabin Filter
    mileageInterval: 30000
  - id: belt
    serviceType: Timing Belt
    mileageInterval: 210000
    timeIntervalMonths: 120
history:
  - id: h1
    serviceType: Oil Change
    serviceDate: '2025-01-15'
    mileageAtService: 50000
    mechanicName: self
    totalCost: 62.4
  - id: h2
    serviceType: Cabin Filter
    serviceDate: '2024-09-01'
    mileageAtService: 45000
"""


@pytest.fixture
def vehicle_file(tmp_path):
    path = tmp_path / "golf.yaml"
    path.write_text(VEHICLE_YAML)
    return path


def make_due(**overrides):
    fields = dict(
        reminder=ServiceReminder("Oil Change", 10000, time_interval_months=6),
        next_due_mileage=60000,
        is_due=False,
        is_due_by_mileage=False,
        is_due_by_time=False,
        has_no_service_record=False,
        miles_until_due=5000,
    )
    fields.update(overrides)
    return ServiceDue(**fields)


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(50000) == "50,000"
        assert format_km(0) == "0"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_number(self):
        assert format_cost(75.50) == "€75.50"
        assert format_cost(1234) == "€1,234.00"

    def test_none_returns_dash(self):
        assert format_cost(None) == "-"


class TestFormatTimeInterval:
    """Tests for format_time_interval."""

    def test_none_or_zero_returns_dash(self):
        assert format_time_interval(None) == "-"
        assert format_time_interval(0) == "-"

    def test_months(self):
        assert format_time_interval(1) == "1 month"
        assert format_time_interval(6) == "6 months"

    def test_years(self):
        assert format_time_interval(12) == "1 year"
        assert format_time_interval(24) == "2 years"
        assert format_time_interval(18) == "1.5 years"


class TestFormatRemaining:
    """Tests for format_remaining and format_months_remaining."""

    def test_positive_remaining(self):
        assert format_remaining(make_due(miles_until_due=2500)) == "2,500"

    def test_negative_remaining_overdue(self):
        assert format_remaining(make_due(miles_until_due=-1500)) == "-1,500"

    def test_months_none_returns_dash(self):
        assert format_months_remaining(make_due()) == "-"

    def test_months(self):
        assert format_months_remaining(make_due(months_until_due=3)) == "3mo"
        assert format_months_remaining(make_due(months_until_due=-1)) == "-1mo"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeStatusTable:
    """Tests for make_status_table."""

    def test_empty_list_returns_empty_rows(self):
        assert make_status_table([]) == []

    def test_single_service_row(self):
        svc = make_due(
            months_until_due=1,
            due_date=date(2025, 7, 15),
            last_service_date="2025-01-15",
            last_service_mileage=50000,
        )
        assert make_status_table([svc]) == [
            ["Oil Change", "2025-01-15 @ 50,000", "60,000", "2025-07-15", "5,000", "1mo"]
        ]

    def test_last_done_dash_when_no_history(self):
        svc = make_due(has_no_service_record=True, is_due=True)
        assert make_status_table([svc])[0][1] == "-"


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_converts_entries_to_rows(self):
        entries = [
            ServiceRecord(
                "Oil Change", "2025-01-15", 95000,
                mechanic_name="self", total_cost=45.0, notes="Castrol Edge",
            ),
        ]
        assert make_history_table(entries) == [
            ["2025-01-15", "95,000", "Oil Change", "self", "€45.00", "Castrol Edge"]
        ]

    def test_missing_optional_fields(self):
        rows = make_history_table([ServiceRecord("Oil Change", "2025-01-15", 95000)])
        assert rows[0][3:] == ["-", "-", "-"]


# =============================================================================
# Commands
# =============================================================================


class TestCommands:
    """Tests for CLI commands run through main()."""

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.yaml"), "status"]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_status(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "status"]) == 0
        out = capsys.readouterr().out
        assert "2014 Volkswagen Golf" in out
        assert "2 service(s) overdue" in out
        assert "1 with no service record" in out
        assert "NO SERVICE RECORD:" in out
        assert "OVERDUE:" in out
        # Timing Belt (no record) leads, then Oil Change (due by mileage)
        assert out.index("! Timing Belt") < out.index("! Oil Change")
        assert "Cabin Filter: due at 75,000 km (14,000 km)" in out

    def test_status_no_reminders(self, tmp_path, capsys):
        path = tmp_path / "empty.yaml"
        path.write_text("vehicle: {make: Honda, model: Jazz, year: 2010}\n")
        assert main([str(path), "status"]) == 0
        assert "No service reminders configured." in capsys.readouterr().out

    def test_history(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history"]) == 0
        out = capsys.readouterr().out
        assert "Total services: 2" in out
        assert "Total cost: €62.40" in out
        assert out.index("2025-01-15") < out.index("2024-09-01")

    def test_history_filters(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--type", "cabin"]) == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Oil Change" not in out.split("Showing")[1]

    def test_history_since_no_entries(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "history", "--since", "2030-01-01"]) == 0
        assert "No history entries found." in capsys.readouterr().out

    def test_log(self, vehicle_file, capsys):
        argv = [str(vehicle_file), "log", "oil change", "--mileage", "61500",
                "--date", "2025-06-15", "--cost", "70"]
        assert main(argv) == 0
        assert "Entry saved." in capsys.readouterr().out

        vehicle = load_vehicle(vehicle_file)
        last = vehicle.get_last_service("Oil Change")
        # Canonical spelling taken from the matching reminder
        assert last.service_type == "Oil Change"
        assert last.mileage_at_service == 61500
        assert vehicle.current_mileage == 61500
        assert vehicle.get_service_summary().overdue_count == 1

    def test_log_rejects_malformed_date(self, vehicle_file, capsys):
        before = vehicle_file.read_text()
        argv = [str(vehicle_file), "log", "Oil Change", "--date", "15/03/2025",
                "--mileage", "149000"]
        assert main(argv) == 1
        assert "Error: Service date must be YYYY-MM-DD" in capsys.readouterr().out
        assert vehicle_file.read_text() == before
        assert main([str(vehicle_file), "status"]) == 0

    def test_log_dry_run_still_validates(self, vehicle_file, capsys):
        argv = [str(vehicle_file), "log", "Oil Change", "--date", "yesterday", "--dry-run"]
        assert main(argv) == 1
        assert "dry run" not in capsys.readouterr().out

    def test_log_defaults_to_current_mileage(self, vehicle_file):
        assert main([str(vehicle_file), "log", "Wheel Alignment"]) == 0
        record = load_vehicle(vehicle_file).get_last_service("Wheel Alignment")
        assert record.mileage_at_service == 61000

    def test_log_dry_run(self, vehicle_file, capsys):
        before = vehicle_file.read_text()
        assert main([str(vehicle_file), "log", "Oil Change", "--dry-run"]) == 0
        assert "dry run" in capsys.readouterr().out
        assert vehicle_file.read_text() == before

    def test_update_miles(self, vehicle_file):
        assert main([str(vehicle_file), "update-miles", "62000"]) == 0
        assert load_vehicle(vehicle_file).current_mileage == 62000

    def test_update_miles_negative(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "update-miles", "-5"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_reminders_sorted(self, vehicle_file, capsys):
        argv = [str(vehicle_file), "reminders", "--sort", "mileage_interval", "--desc"]
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert out.index("Timing Belt") < out.index("Cabin Filter") < out.index("Oil Change")
        assert "10 years" in out
        assert "6 months" in out

    def test_add_reminder(self, vehicle_file, capsys):
        argv = [str(vehicle_file), "add-reminder", "Brake Fluid", "60000", "--months", "24"]
        assert main(argv) == 0
        assert "or every 2 years" in capsys.readouterr().out
        reminders = load_vehicle(vehicle_file).reminders
        assert reminders[-1].service_type == "Brake Fluid"
        assert reminders[-1].time_interval_months == 24

    def test_add_invalid_reminder(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "add-reminder", "Brake Fluid", "0"]) == 1
        assert "Mileage interval must be positive" in capsys.readouterr().out

    def test_delete_reminder(self, vehicle_file):
        assert main([str(vehicle_file), "delete-reminder", "cabin"]) == 0
        ids = [r.id for r in load_vehicle(vehicle_file).reminders]
        assert ids == ["oil", "belt"]

    def test_delete_unknown_reminder(self, vehicle_file, capsys):
        assert main([str(vehicle_file), "delete-reminder", "nope"]) == 1
        assert "Reminder 'nope' not found" in capsys.readouterr().out


# =============================================================================
# Issues and catalogs
# =============================================================================

CATALOG_YAML = """
vehicle:
  make: Volkswagen
  model: Golf
  year: 2014
issues:
  - id: rattle
    title: Rattle from rear axle
    priority: medium
    status: open
    createdAt: '2025-02-11T18:30:00'
  - id: light
    title: Check engine light
    priority: high
    status: resolved
    createdAt: '2025-03-01T09:00:00'
  - id: wiper
    title: Wiper streaks
    priority: low
    status: in_progress
    createdAt: '2025-04-01T09:00:00'
parts:
  - id: filter
    name: Oil filter
    category: Engine
    specifications: Mann HU 7008 z
    priceEur: 9.5
  - id: fluid
    name: Brake fluid DOT 4
    category: Brakes
inspections:
  - id: belt
    title: Timing belt condition
    category: Engine
    isPriority: true
  - id: tyres
    title: Tyre tread depth
    category: Wheels
diagnostics:
  - id: pedal
    title: Soft brake pedal
    system: Brakes
    steps: |
      Check fluid level
      Bleed the system
    relatedPartIds: [fluid]
videos:
  - id: oil
    title: Oil and filter change
    youtubeLink: https://youtu.be/abc
    category: Maintenance
    difficultyLevel: Beginner
"""


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "golf.yaml"
    path.write_text(CATALOG_YAML)
    return path


class TestIssueCommands:
    """Tests for the issue tracker commands."""

    def test_issues_lists_newest_first(self, catalog_file, capsys):
        assert main([str(catalog_file), "issues"]) == 0
        out = capsys.readouterr().out
        assert "Issues: 3 (2 unresolved)" in out
        assert out.index("Wiper streaks") < out.index("Check engine light") < out.index("Rattle")

    def test_issues_filter_by_status(self, catalog_file, capsys):
        assert main([str(catalog_file), "issues", "--status", "open"]) == 0
        out = capsys.readouterr().out
        assert "Rattle from rear axle" in out
        assert "Check engine light" not in out

    def test_issues_sort_by_priority(self, catalog_file, capsys):
        assert main([str(catalog_file), "issues", "--sort", "priority"]) == 0
        out = capsys.readouterr().out
        assert out.index("Check engine light") < out.index("Rattle") < out.index("Wiper")

    def test_add_issue(self, catalog_file, capsys):
        argv = [str(catalog_file), "add-issue", "Door seal leaks", "--priority", "high"]
        assert main(argv) == 0
        assert "high priority, open" in capsys.readouterr().out
        added = load_vehicle(catalog_file).issues[-1]
        assert added.title == "Door seal leaks"

    def test_add_issue_blank_title(self, catalog_file, capsys):
        assert main([str(catalog_file), "add-issue", "   "]) == 1
        assert "Please enter a title" in capsys.readouterr().out

    def test_issue_status(self, catalog_file):
        assert main([str(catalog_file), "issue-status", "rattle", "in_progress"]) == 0
        assert load_vehicle(catalog_file).get_issue("rattle").status == "in_progress"

    def test_issue_status_unknown(self, catalog_file, capsys):
        assert main([str(catalog_file), "issue-status", "nope", "resolved"]) == 1
        assert "Issue 'nope' not found" in capsys.readouterr().out

    def test_delete_issue(self, catalog_file):
        assert main([str(catalog_file), "delete-issue", "light"]) == 0
        assert [i.id for i in load_vehicle(catalog_file).issues] == ["rattle", "wiper"]


class TestCatalogCommands:
    """Tests for the catalog listing commands."""

    def test_parts_grouped_by_category(self, catalog_file, capsys):
        assert main([str(catalog_file), "parts"]) == 0
        out = capsys.readouterr().out
        assert out.index("BRAKES:") < out.index("ENGINE:")
        assert "€9.50" in out

    def test_parts_search(self, catalog_file, capsys):
        assert main([str(catalog_file), "parts", "--search", "hu 7008"]) == 0
        out = capsys.readouterr().out
        assert "Oil filter" in out
        assert "Brake fluid" not in out

    def test_parts_none_found(self, catalog_file, capsys):
        assert main([str(catalog_file), "parts", "--category", "Body"]) == 0
        assert "No parts found." in capsys.readouterr().out

    def test_inspections_mark_priority(self, catalog_file, capsys):
        assert main([str(catalog_file), "inspections"]) == 0
        out = capsys.readouterr().out
        assert "(1 priority)" in out
        assert "! Timing belt condition" in out

    def test_diagnostics_show_related_parts(self, catalog_file, capsys):
        assert main([str(catalog_file), "diagnostics", "--system", "Brakes"]) == 0
        out = capsys.readouterr().out
        assert "Soft brake pedal" in out
        assert "Brake fluid DOT 4" in out

    def test_videos(self, catalog_file, capsys):
        assert main([str(catalog_file), "videos", "--search", "filter"]) == 0
        out = capsys.readouterr().out
        assert "MAINTENANCE:" in out
        assert "https://youtu.be/abc" in out
