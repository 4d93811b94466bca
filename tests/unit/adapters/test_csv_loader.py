"""Tests for the assignment CSV loader."""

import csv
import tempfile
from datetime import date
from pathlib import Path

import pytest

from rental_repairs.adapters.csv_loader.loader import load_assignments, row_to_assignment
from rental_repairs.domain.exceptions import InvalidAssignmentError
from rental_repairs.domain.value_objects.enums import AssignmentStatus


def _write_csv(rows: list[dict], path: Path, delimiter: str = ",") -> None:
    """Helper to write a test CSV file."""
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys(), delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)


def test_load_assignments_basic(assignments_csv_rows):
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "assignments.csv"
        _write_csv(assignments_csv_rows, csv_path)

        assignments = load_assignments(csv_path)
        assert len(assignments) == 2
        first, second = assignments
        assert first.request_id == "req-1"
        assert first.unit_key == ("PROP001", "101")
        assert first.scheduled_date == date(2025, 1, 15)
        assert first.status == AssignmentStatus.SCHEDULED
        assert first.is_emergency is False
        assert second.status == AssignmentStatus.IN_PROGRESS
        assert second.is_emergency is True
        assert second.work_order_number == "WO-002"


def test_load_assignments_semicolon_delimiter(assignments_csv_rows):
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "assignments.csv"
        _write_csv(assignments_csv_rows, csv_path, delimiter=";")
        assert len(load_assignments(csv_path)) == 2


def test_load_assignments_column_aliases():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "export.csv"
        _write_csv([
            {
                "Tenant Request Id": "req-9", "Property": "PROP002", "Tenant Unit": "3B",
                "Assigned Worker Email": "paint@test.com", "Date": "2025-02-01 10:00",
                "Emergency": "",
            },
        ], csv_path)

        (a,) = load_assignments(csv_path)
        assert a.request_id == "req-9"
        assert a.unit_key == ("PROP002", "3B")
        assert a.worker_email == "paint@test.com"
        assert a.scheduled_date == date(2025, 2, 1)
        assert a.status == AssignmentStatus.SCHEDULED
        assert a.is_emergency is False


def test_load_assignments_skips_bad_rows(assignments_csv_rows, caplog):
    rows = assignments_csv_rows + [
        {**assignments_csv_rows[0], "RequestId": "req-3", "WorkerEmail": ""},
        {**assignments_csv_rows[0], "RequestId": "req-4", "ScheduledDate": "soon"},
        {**assignments_csv_rows[0], "RequestId": "req-5", "Status": "Paused"},
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "assignments.csv"
        _write_csv(rows, csv_path)

        assignments = load_assignments(csv_path)
        assert [a.request_id for a in assignments] == ["req-1", "req-2"]
        assert caplog.text.count("Skipping") == 3


def test_load_assignments_empty_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "empty.csv"
        csv_path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="no header row"):
            load_assignments(csv_path)


def test_row_to_assignment_bad_flag():
    row = {
        "request_id": "r1", "property_code": "P", "unit_number": "1",
        "worker_email": "w@test.com", "scheduled_date": "2025-01-15", "is_emergency": "sometimes",
    }
    with pytest.raises(InvalidAssignmentError, match="yes/no"):
        row_to_assignment(row)


def test_load_assignments_status_spellings(assignments_csv_rows):
    spellings = ["scheduled", "SCHEDULED", "In Progress", "in_progress"]
    rows = [
        {**assignments_csv_rows[0], "RequestId": f"req-{i}", "Status": status}
        for i, status in enumerate(spellings)
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "assignments.csv"
        _write_csv(rows, csv_path)

        assignments = load_assignments(csv_path)
        assert [a.status for a in assignments] == [
            AssignmentStatus.SCHEDULED,
            AssignmentStatus.SCHEDULED,
            AssignmentStatus.IN_PROGRESS,
            AssignmentStatus.IN_PROGRESS,
        ]
        assert all(a.is_active for a in assignments)


def test_load_assignments_skips_rows_without_request_id(assignments_csv_rows, caplog):
    rows = [{**assignments_csv_rows[0], "RequestId": ""}, assignments_csv_rows[1]]
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "assignments.csv"
        _write_csv(rows, csv_path)

        assignments = load_assignments(csv_path)
        assert [a.request_id for a in assignments] == ["req-2"]
        assert "request_id" in caplog.text
