#!/usr/bin/env python3
"""Tests for parts, inspection, diagnostic and video catalog entries."""

import pytest

from garage import (
    DiagnosticProcedure,
    InspectionItem,
    Part,
    Video,
    validate_diagnostic,
    validate_inspection,
    validate_part,
    validate_video,
)


class TestPart:
    """Tests for Part class."""

    def test_defaults(self):
        part = Part("Oil filter")
        assert part.category == "Engine"
        assert part.price_eur is None

    def test_matches_search(self):
        part = Part("Oil filter", specifications="Mann HU 7008 z")
        assert part.matches_search("FILTER")
        assert part.matches_search("hu 7008")
        assert not part.matches_search("brake")

    def test_matches_search_without_specifications(self):
        assert not Part("Oil filter").matches_search("mann")

    def test_validate(self):
        validate_part(Part("Oil filter", price_eur=0))
        with pytest.raises(ValueError):
            validate_part(Part(""))
        with pytest.raises(ValueError):
            validate_part(Part("Oil filter", price_eur=-0.5))


class TestInspectionItem:
    """Tests for InspectionItem class."""

    def test_defaults(self):
        item = InspectionItem("Tyre tread depth")
        assert item.category == "General"
        assert item.is_priority is False

    def test_validate(self):
        with pytest.raises(ValueError):
            validate_inspection(InspectionItem(" "))


class TestDiagnosticProcedure:
    """Tests for DiagnosticProcedure class."""

    def test_step_list(self):
        procedure = DiagnosticProcedure(
            "Soft pedal", steps="Check fluid level\n\n  Bleed the system  \n"
        )
        assert procedure.step_list == ["Check fluid level", "Bleed the system"]

    def test_step_list_empty(self):
        assert DiagnosticProcedure("Soft pedal").step_list == []

    def test_related_part_ids_copied(self):
        ids = ["a"]
        procedure = DiagnosticProcedure("Soft pedal", related_part_ids=ids)
        ids.append("b")
        assert procedure.related_part_ids == ["a"]

    def test_validate(self):
        with pytest.raises(ValueError):
            validate_diagnostic(DiagnosticProcedure(""))


class TestVideo:
    """Tests for Video class."""

    def test_defaults(self):
        video = Video("Oil change", "https://youtu.be/abc")
        assert video.category == "General"
        assert video.difficulty_level == "Intermediate"

    def test_matches_search(self):
        video = Video("Oil change", "https://youtu.be/abc", description="Drain plug torque")
        assert video.matches_search("torque")
        assert not video.matches_search("brake")

    def test_validate(self):
        validate_video(Video("Oil change", "https://youtu.be/abc", difficulty_level="Advanced"))
        with pytest.raises(ValueError):
            validate_video(Video("Oil change", ""))
        with pytest.raises(ValueError):
            validate_video(Video("Oil change", "https://youtu.be/abc", difficulty_level="Easy"))
