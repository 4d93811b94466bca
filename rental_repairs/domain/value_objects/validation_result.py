"""ValidationResult value object — the engine's decision for one candidate."""

from __future__ import annotations

from dataclasses import dataclass, field

from rental_repairs.domain.entities.assignment import ExistingAssignment
from rental_repairs.domain.value_objects.enums import ConflictType


@dataclass
class ValidationResult:
    is_valid: bool = True
    conflict_type: ConflictType = ConflictType.NONE
    error_message: str = ""
    conflicting_assignments: list[ExistingAssignment] = field(default_factory=list)
    assignments_to_cancel_for_emergency: list[ExistingAssignment] = field(default_factory=list)
    emergency_conflicts: list[ExistingAssignment] = field(default_factory=list)

    @property
    def has_emergency_conflicts(self) -> bool:
        return bool(self.emergency_conflicts)

    @classmethod
    def conflict(
        cls,
        conflict_type: ConflictType,
        message: str,
        conflicting: list[ExistingAssignment] | None = None,
    ) -> ValidationResult:
        return cls(
            is_valid=False,
            conflict_type=conflict_type,
            error_message=message,
            conflicting_assignments=list(conflicting or []),
        )

    def cancel(self, assignments: list[ExistingAssignment]) -> None:
        """Mark assignments for emergency cancellation, keeping order, no duplicates."""
        for a in assignments:
            if a not in self.assignments_to_cancel_for_emergency:
                self.assignments_to_cancel_for_emergency.append(a)

    def flag(self, assignments: list[ExistingAssignment]) -> None:
        """Surface emergency assignments that stay in place."""
        for a in assignments:
            if a not in self.emergency_conflicts:
                self.emergency_conflicts.append(a)
