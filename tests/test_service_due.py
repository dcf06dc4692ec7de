#!/usr/bin/env python3
"""Tests for ServiceDue and DueSummary dataclasses."""
from datetime import date

import pytest
from garage import DueSummary, ServiceDue, ServiceReminder, Status


@pytest.fixture
def reminder():
    return ServiceReminder(
        "Oil Change", 10000, time_interval_months=6, id="r1"
    )


def make_due(reminder, **overrides):
    fields = dict(
        reminder=reminder,
        next_due_mileage=60000,
        is_due=False,
        is_due_by_mileage=False,
        is_due_by_time=False,
        has_no_service_record=False,
        miles_until_due=5000,
    )
    fields.update(overrides)
    return ServiceDue(**fields)


class TestServiceDue:
    """Tests for ServiceDue dataclass."""

    def test_status_ok(self, reminder):
        assert make_due(reminder).status == Status.OK

    def test_status_overdue(self, reminder):
        svc = make_due(reminder, is_due=True, is_due_by_mileage=True)
        assert svc.status == Status.OVERDUE

    def test_status_no_record(self, reminder):
        svc = make_due(reminder, is_due=True, has_no_service_record=True)
        assert svc.status == Status.NO_RECORD

    def test_service_type(self, reminder):
        assert make_due(reminder).service_type == "Oil Change"

    def test_as_dict(self, reminder):
        svc = make_due(
            reminder,
            months_until_due=1,
            due_date=date(2025, 7, 15),
            last_service_date="2025-01-15",
            last_service_mileage=50000,
        )
        assert svc.as_dict() == {
            "id": "r1",
            "service_type": "Oil Change",
            "mileage_interval": 10000,
            "last_service_mileage": 0,
            "time_interval_months": 6,
            "next_due_mileage": 60000,
            "is_due": False,
            "is_due_by_mileage": False,
            "is_due_by_time": False,
            "has_no_service_record": False,
            "miles_until_due": 5000,
            "months_until_due": 1,
            "due_date": "2025-07-15",
            "last_service_date": "2025-01-15",
            "status": "OK",
        }

    def test_as_dict_without_due_date(self, reminder):
        assert make_due(reminder).as_dict()["due_date"] is None


class TestDueSummary:
    """Tests for DueSummary dataclass."""

    def test_has_any_overdue(self):
        assert DueSummary(overdue_count=2, no_record_count=1).has_any_overdue is True
        assert DueSummary().has_any_overdue is False

    def test_as_dict(self):
        assert DueSummary(3, 1).as_dict() == {
            "overdue_count": 3,
            "no_record_count": 1,
            "has_any_overdue": True,
        }
