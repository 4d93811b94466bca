"""CSV loader — reads an assignment export into a scheduling snapshot."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from rental_repairs.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_date,
    parse_status,
)
from rental_repairs.domain.entities.assignment import ExistingAssignment
from rental_repairs.domain.exceptions import InvalidAssignmentError

logger = logging.getLogger(__name__)

# Normalized header -> field; first match wins
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "request_id": ("request_id", "tenant_request_id", "id"),
    "property_code": ("property_code", "property"),
    "unit_number": ("unit_number", "unit", "tenant_unit"),
    "worker_email": ("worker_email", "assigned_worker_email", "worker"),
    "scheduled_date": ("scheduled_date", "date"),
    "status": ("status",),
    "is_emergency": ("is_emergency", "emergency"),
    "work_order_number": ("work_order_number", "work_order"),
}


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Pick the delimiter (comma/semicolon/tab) used on the header line."""
    first_line = sample.splitlines()[0] if sample else ""
    counts = {d: first_line.count(d) for d in (",", ";", "\t")}
    best = max(counts, key=counts.get)
    if counts[best] == 0:
        return csv.excel

    class DynamicDialect(csv.excel):
        delimiter = best

    return DynamicDialect


def _read_rows(file_path: Path) -> list[dict[str, str | None]]:
    """Rows keyed by normalized header; blank cells are None, overflow cells dropped."""
    with open(file_path, encoding="utf-8-sig", newline="") as f:
        dialect = _sniff_dialect(f.read(4096))
        f.seek(0)
        reader = csv.DictReader(f, dialect=dialect)
        if not reader.fieldnames:
            raise ValueError(f"CSV file {file_path} has no header row")

        headers = {raw: normalize_column_name(raw) for raw in reader.fieldnames}
        rows = []
        for record in reader:
            rows.append({headers[raw]: clean_string(cell) for raw, cell in record.items() if raw is not None})

    logger.info(
        "Read %d rows from %s (delimiter %r, columns: %s)",
        len(rows), file_path.name, dialect.delimiter, sorted(set(headers.values())),
    )
    return rows


def _pick(row: dict[str, str | None], field_name: str) -> str | None:
    for column in COLUMN_ALIASES[field_name]:
        value = row.get(column)
        if value is not None:
            return value
    return None


def row_to_assignment(row: dict[str, str | None]) -> ExistingAssignment:
    """Build one assignment from a normalized row.

    Raises:
        InvalidAssignmentError: a required value is missing or malformed.
    """
    try:
        scheduled = parse_date(_pick(row, "scheduled_date"))
        emergency = parse_bool(_pick(row, "is_emergency"))
        status = parse_status(_pick(row, "status"))
    except ValueError as e:
        raise InvalidAssignmentError(str(e)) from e

    return ExistingAssignment(
        request_id=_pick(row, "request_id") or "",
        property_code=_pick(row, "property_code") or "",
        unit_number=_pick(row, "unit_number") or "",
        worker_email=_pick(row, "worker_email") or "",
        scheduled_date=scheduled,
        status=status,
        is_emergency=emergency,
        work_order_number=_pick(row, "work_order_number") or "",
    )


def load_assignments(file_path: Path) -> list[ExistingAssignment]:
    """Load an assignment export; malformed rows are skipped with a warning.

    Expected columns (after normalization):
        request_id, property_code, unit_number, worker_email, scheduled_date,
        status, is_emergency, work_order_number
    """
    assignments = []
    for line_no, row in enumerate(_read_rows(file_path), start=2):
        try:
            assignments.append(row_to_assignment(row))
        except InvalidAssignmentError as e:
            logger.warning("Skipping %s line %d: %s", file_path.name, line_no, e)
    logger.info("Parsed %d assignments", len(assignments))
    return assignments
