"""Check a proposed worker assignment against an assignment export.

Usage:
    python -m rental_repairs.tools.check_assignment --snapshot assignments.csv \\
        --property PROP001 --unit 101 --date 2025-01-15 --worker plumber@test.com \\
        --worker-specialization Plumber --required Plumbing
    python -m rental_repairs.tools.check_assignment ... --emergency

Exit status: 0 when the assignment is allowed, 1 when a conflict blocks it,
2 on bad input.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rental_repairs.adapters.csv_loader.loader import load_assignments
from rental_repairs.adapters.csv_loader.normalizer import parse_date
from rental_repairs.config import Settings, settings
from rental_repairs.domain.entities.assignment import AssignmentCandidate
from rental_repairs.domain.policies.cancellation import process_emergency_override
from rental_repairs.domain.policies.conflict_detection import ConflictDetector
from rental_repairs.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFLICT = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate a worker assignment against existing work")
    parser.add_argument("--snapshot", type=Path, required=True, help="CSV export of existing assignments")
    parser.add_argument("--property", required=True, help="Property code, e.g. PROP001")
    parser.add_argument("--unit", required=True, help="Unit number")
    parser.add_argument("--date", required=True, help="Scheduled date (YYYY-MM-DD)")
    parser.add_argument("--worker", required=True, help="Worker email")
    parser.add_argument("--worker-specialization", default="", help="Worker specialization or role")
    parser.add_argument("--required", default="", help="Required specialization (blank = any)")
    parser.add_argument("--request-id", default="candidate", help="Id of the request being scheduled")
    parser.add_argument("--emergency", action="store_true", help="Candidate is an emergency request")
    return parser


def format_result(result: ValidationResult) -> list[str]:
    if not result.is_valid:
        return [f"CONFLICT {result.conflict_type.value}: {result.error_message}"]

    lines = ["OK: assignment allowed"]
    if result.assignments_to_cancel_for_emergency:
        cancellation = process_emergency_override(result.assignments_to_cancel_for_emergency)
        lines.append(f"Cancels {len(cancellation)} assignment(s):")
        lines.extend(
            f"  - {c.request_id}: {c.cancellation_reason}" for c in cancellation.cancelled_assignments
        )
    if result.has_emergency_conflicts:
        lines.append(f"Warning: overlaps {len(result.emergency_conflicts)} emergency assignment(s):")
        lines.extend(
            f"  - {a.request_id} ({a.worker_email}, work order {a.work_order_number or 'n/a'})"
            for a in result.emergency_conflicts
        )
    return lines


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.snapshot.exists():
        logger.error("Snapshot file not found: %s", args.snapshot)
        return EXIT_BAD_INPUT

    try:
        candidate = AssignmentCandidate(
            request_id=args.request_id,
            property_code=args.property,
            unit_number=args.unit,
            scheduled_date=parse_date(args.date),
            worker_email=args.worker,
            worker_specialization=args.worker_specialization,
            required_specialization=args.required,
            is_emergency=args.emergency,
        )
    except ValueError as e:  # includes InvalidAssignmentError
        logger.error("Invalid candidate: %s", e)
        return EXIT_BAD_INPUT

    try:
        snapshot = load_assignments(args.snapshot)
    except ValueError as e:  # includes UnicodeDecodeError
        logger.error("Unreadable snapshot %s: %s", args.snapshot, e)
        return EXIT_BAD_INPUT

    result = ConflictDetector.from_settings(settings).validate(candidate, snapshot)
    for line in format_result(result):
        print(line)
    return EXIT_OK if result.is_valid else EXIT_CONFLICT


def log_level(cfg: Settings) -> str:
    return "DEBUG" if cfg.debug else cfg.log_level.upper()


def main():
    logging.basicConfig(level=log_level(settings), format="%(levelname)s | %(message)s")
    sys.exit(run())


if __name__ == "__main__":
    main()
