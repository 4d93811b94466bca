"""AssignmentSnapshot value object — immutable point-in-time view of scheduled work."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from rental_repairs.domain.entities.assignment import ExistingAssignment


@dataclass(frozen=True)
class AssignmentSnapshot:
    """Assignments the caller read from its store for one validation call.

    The snapshot is never mutated; every filter returns a new snapshot so
    rules can narrow it step by step.
    """

    assignments: tuple[ExistingAssignment, ...] = ()

    @classmethod
    def of(cls, assignments: Iterable[ExistingAssignment] | AssignmentSnapshot) -> AssignmentSnapshot:
        if isinstance(assignments, AssignmentSnapshot):
            return assignments
        return cls(tuple(assignments))

    def __iter__(self) -> Iterator[ExistingAssignment]:
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    def active(self) -> AssignmentSnapshot:
        return AssignmentSnapshot(tuple(a for a in self.assignments if a.is_active))

    def on_date(self, day: date) -> AssignmentSnapshot:
        return AssignmentSnapshot(tuple(a for a in self.assignments if a.scheduled_date == day))

    def in_unit(self, property_code: str, unit_number: str) -> AssignmentSnapshot:
        key = (property_code.strip(), unit_number.strip())
        return AssignmentSnapshot(tuple(a for a in self.assignments if a.unit_key == key))

    def for_worker(self, worker_email: str) -> AssignmentSnapshot:
        return AssignmentSnapshot(tuple(a for a in self.assignments if a.is_for_worker(worker_email)))

    def excluding_worker(self, worker_email: str) -> AssignmentSnapshot:
        return AssignmentSnapshot(tuple(a for a in self.assignments if not a.is_for_worker(worker_email)))

    def excluding_request(self, request_id: str) -> AssignmentSnapshot:
        return AssignmentSnapshot(tuple(a for a in self.assignments if a.request_id != request_id))
