"""EmergencyOverridePolicy — which conflicting work an emergency displaces."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rental_repairs.domain.entities.assignment import ExistingAssignment


@dataclass(frozen=True)
class OverrideDecision:
    """Result of the policy evaluation."""

    to_cancel: tuple[ExistingAssignment, ...]
    to_flag: tuple[ExistingAssignment, ...]  # emergencies: left in place, surfaced to the caller


def resolve(
    candidate_is_emergency: bool,
    conflicting: Iterable[ExistingAssignment],
) -> OverrideDecision:
    """Split conflicting assignments by their own emergency flag.

    Business rules:
      1. Non-emergency work in the way of an emergency is cancelled.
      2. Another emergency is never cancelled; it is flagged so a human can
         decide (notify but allow).

    Raises:
        ValueError: if the candidate is not an emergency.  Non-emergency
            conflicts are hard failures and never reach this policy.
    """
    if not candidate_is_emergency:
        raise ValueError("Emergency override applies to emergency candidates only")

    to_cancel: list[ExistingAssignment] = []
    to_flag: list[ExistingAssignment] = []
    for assignment in conflicting:
        (to_flag if assignment.is_emergency else to_cancel).append(assignment)

    return OverrideDecision(to_cancel=tuple(to_cancel), to_flag=tuple(to_flag))
