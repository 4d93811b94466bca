"""CancellationPolicy — turn emergency-displaced assignments into an audit record."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from rental_repairs.domain.entities.assignment import ExistingAssignment

EMERGENCY_OVERRIDE_REASON = "Cancelled due to emergency override"


@dataclass(frozen=True)
class CancelledAssignment:
    assignment: ExistingAssignment
    cancellation_reason: str

    @property
    def request_id(self) -> str:
        return self.assignment.request_id


@dataclass
class CancellationResult:
    cancelled_request_ids: set[str] = field(default_factory=set)
    cancelled_assignments: list[CancelledAssignment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cancelled_assignments)


def cancellation_reason(assignment: ExistingAssignment) -> str:
    work_order = assignment.work_order_number or "n/a"
    return (
        f"{EMERGENCY_OVERRIDE_REASON} (previous worker {assignment.worker_email}, "
        f"work order {work_order}, scheduled {assignment.scheduled_date.isoformat()})"
    )


def process_emergency_override(to_cancel: Iterable[ExistingAssignment]) -> CancellationResult:
    """Pure function: one cancellation entry per assignment, in input order.

    The caller moves the underlying requests back to an unscheduled state
    and notifies whoever was affected.
    """
    result = CancellationResult()
    for assignment in to_cancel:
        result.cancelled_request_ids.add(assignment.request_id)
        result.cancelled_assignments.append(
            CancelledAssignment(assignment=assignment, cancellation_reason=cancellation_reason(assignment))
        )
    return result
