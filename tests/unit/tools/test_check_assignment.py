"""Tests for the check_assignment command-line tool."""

import csv
from datetime import date
from pathlib import Path

import pytest

from rental_repairs.config import Settings
from rental_repairs.domain.entities.assignment import ExistingAssignment
from rental_repairs.domain.value_objects.enums import ConflictType
from rental_repairs.domain.value_objects.validation_result import ValidationResult
from rental_repairs.tools.check_assignment import (
    EXIT_BAD_INPUT,
    EXIT_CONFLICT,
    EXIT_OK,
    format_result,
    log_level,
    run,
)


@pytest.fixture
def snapshot_csv(tmp_path: Path, assignments_csv_rows) -> Path:
    path = tmp_path / "assignments.csv"
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=assignments_csv_rows[0].keys())
        writer.writeheader()
        writer.writerows(assignments_csv_rows)
    return path


def _args(snapshot: Path, *extra: str, unit: str = "103", worker: str = "electric@test.com") -> list[str]:
    return [
        "--snapshot", str(snapshot),
        "--property", "PROP001",
        "--unit", unit,
        "--date", "2025-01-15",
        "--worker", worker,
        "--worker-specialization", "Electrician",
        "--required", "Electrical",
        *extra,
    ]


# ─── run ─────────────────────────────────────────────────────────────


def test_free_slot_is_allowed(snapshot_csv, capsys):
    assert run(_args(snapshot_csv)) == EXIT_OK
    assert capsys.readouterr().out.strip() == "OK: assignment allowed"


def test_occupied_unit_is_a_conflict(snapshot_csv, capsys):
    assert run(_args(snapshot_csv, unit="101")) == EXIT_CONFLICT
    out = capsys.readouterr().out
    assert out.startswith("CONFLICT UnitConflict:")
    assert "hvac@test.com" in out


def test_emergency_lists_cancellations(snapshot_csv, capsys):
    assert run(_args(snapshot_csv, "--emergency", unit="101")) == EXIT_OK
    out = capsys.readouterr().out
    assert "Cancels 1 assignment(s):" in out
    assert "  - req-1: Cancelled due to emergency override" in out


def test_emergency_overlap_is_warned(snapshot_csv, capsys):
    # req-2 in unit 102 is itself an emergency
    assert run(_args(snapshot_csv, "--emergency", unit="102")) == EXIT_OK
    out = capsys.readouterr().out
    assert "Warning: overlaps 1 emergency assignment(s):" in out
    assert "req-2 (plumber@test.com, work order WO-002)" in out


def test_wrong_specialization(snapshot_csv, capsys):
    args = _args(snapshot_csv) + ["--required", "Plumbing"]
    assert run(args) == EXIT_CONFLICT
    assert "SpecializationMismatch" in capsys.readouterr().out


def test_missing_snapshot_file(tmp_path):
    assert run(_args(tmp_path / "nope.csv")) == EXIT_BAD_INPUT


def test_bad_date(snapshot_csv):
    args = _args(snapshot_csv) + ["--date", "someday"]
    assert run(args) == EXIT_BAD_INPUT


def test_blank_worker(snapshot_csv):
    assert run(_args(snapshot_csv, worker="  ")) == EXIT_BAD_INPUT


def test_empty_snapshot_file(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    assert run(_args(empty)) == EXIT_BAD_INPUT


def test_undecodable_snapshot_file(tmp_path):
    garbled = tmp_path / "garbled.csv"
    garbled.write_bytes(b"RequestId,Status\n\xff\xfe\xfa,\x80\n")
    assert run(_args(garbled)) == EXIT_BAD_INPUT


def test_loosely_spelled_status_still_occupies_unit(tmp_path, assignments_csv_rows, capsys):
    path = tmp_path / "export.csv"
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=assignments_csv_rows[0].keys())
        writer.writeheader()
        writer.writerow({**assignments_csv_rows[0], "Status": "scheduled"})
    assert run(_args(path, unit="101")) == EXIT_CONFLICT
    assert capsys.readouterr().out.startswith("CONFLICT UnitConflict:")


def test_debug_setting_forces_debug_logging():
    assert log_level(Settings(DEBUG=True, LOG_LEVEL="warning")) == "DEBUG"
    assert log_level(Settings(LOG_LEVEL="warning")) == "WARNING"


# ─── format_result ───────────────────────────────────────────────────


def test_format_conflict():
    result = ValidationResult.conflict(ConflictType.WORKER_DOUBLE_BOOKED, "busy elsewhere")
    assert format_result(result) == ["CONFLICT WorkerDoubleBooked: busy elsewhere"]


def test_format_emergency_overlap_without_work_order():
    other = ExistingAssignment(
        request_id="r9", property_code="PROP001", unit_number="101",
        worker_email="w@test.com", scheduled_date=date(2025, 1, 15),
        is_emergency=True,
    )
    result = ValidationResult()
    result.flag([other])
    lines = format_result(result)
    assert lines[0] == "OK: assignment allowed"
    assert lines[-1] == "  - r9 (w@test.com, work order n/a)"
