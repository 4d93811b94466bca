"""ConflictDetectionPolicy — decide whether a worker may take a unit on a date.

Rules run in a fixed priority order; the first one that fires decides the
result:

  1. Specialization match (never waived).
  2. Worker double-booking across units on the same date (never waived,
     an emergency cannot pull a worker out of another unit).
  3. Unit occupancy by other workers.
  4. Per-worker cap inside one unit.

Rules 3 and 4 do not fire for emergency candidates.  Instead they record
side effects on the shared result: non-emergency work in the way is marked
for cancellation, other emergencies are flagged and left in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from rental_repairs.config import Settings, settings
from rental_repairs.domain.entities.assignment import AssignmentCandidate, ExistingAssignment
from rental_repairs.domain.policies.emergency_override import resolve
from rental_repairs.domain.policies.specialization import canonicalize, is_compatible
from rental_repairs.domain.value_objects.enums import ConflictType, UnitLimitScope
from rental_repairs.domain.value_objects.snapshot import AssignmentSnapshot
from rental_repairs.domain.value_objects.validation_result import ValidationResult

logger = logging.getLogger(__name__)

DEFAULT_UNIT_ASSIGNMENT_LIMIT = 2


@dataclass
class RuleContext:
    """Everything a rule needs; ``result`` collects emergency side effects."""

    candidate: AssignmentCandidate
    active: AssignmentSnapshot  # active, excluding the candidate's own request
    same_day: AssignmentSnapshot  # ``active`` narrowed to the candidate's date
    unit_assignment_limit: int
    unit_limit_scope: UnitLimitScope
    result: ValidationResult


RuleOutcome = tuple[bool, ValidationResult]
Rule = Callable[[RuleContext], RuleOutcome]


def _not_fired(ctx: RuleContext) -> RuleOutcome:
    return False, ctx.result


def check_specialization(ctx: RuleContext) -> RuleOutcome:
    c = ctx.candidate
    if is_compatible(c.worker_specialization, c.required_specialization):
        return _not_fired(ctx)

    worker = canonicalize(c.worker_specialization)
    required = canonicalize(c.required_specialization)
    who = f"Worker specialized in {worker}" if worker else "Worker without a specialization"
    return True, ValidationResult.conflict(
        ConflictType.SPECIALIZATION_MISMATCH,
        f"{who} cannot handle {required} work",
    )


def check_worker_double_booking(ctx: RuleContext) -> RuleOutcome:
    c = ctx.candidate
    elsewhere = [a for a in ctx.same_day.for_worker(c.worker_email) if a.unit_key != c.unit_key]
    if not elsewhere:
        return _not_fired(ctx)

    first = elsewhere[0]
    where = f"{first.property_code} Unit {first.unit_number} on {c.scheduled_date.isoformat()}"
    if c.is_emergency:
        message = (
            f"Emergency request cannot override worker {c.worker_email} "
            f"being physically assigned elsewhere ({where})"
        )
    else:
        message = f"Worker {c.worker_email} already assigned to {where}"
    return True, ValidationResult.conflict(ConflictType.WORKER_DOUBLE_BOOKED, message, elsewhere)


def check_unit_occupancy(ctx: RuleContext) -> RuleOutcome:
    c = ctx.candidate
    others = list(ctx.same_day.in_unit(c.property_code, c.unit_number).excluding_worker(c.worker_email))
    if not others:
        return _not_fired(ctx)

    if not c.is_emergency:
        return True, ValidationResult.conflict(
            ConflictType.UNIT_CONFLICT,
            f"Unit {c.unit_number} already has worker {others[0].worker_email} assigned "
            f"on {c.scheduled_date.isoformat()}",
            others,
        )

    decision = resolve(c.is_emergency, others)
    ctx.result.cancel(list(decision.to_cancel))
    ctx.result.flag(list(decision.to_flag))
    return _not_fired(ctx)


def check_worker_unit_limit(ctx: RuleContext) -> RuleOutcome:
    c = ctx.candidate
    pool = ctx.same_day if ctx.unit_limit_scope == UnitLimitScope.SAME_DATE else ctx.active
    held = list(pool.in_unit(c.property_code, c.unit_number).for_worker(c.worker_email))
    limit = ctx.unit_assignment_limit
    if len(held) < limit:
        return _not_fired(ctx)

    if not c.is_emergency:
        message = f"Worker {c.worker_email} already has maximum {limit} assignments in Unit {c.unit_number}"
        if ctx.unit_limit_scope == UnitLimitScope.SAME_DATE:
            message += f" on {c.scheduled_date.isoformat()}"
        return True, ValidationResult.conflict(ConflictType.WORKER_UNIT_LIMIT, message, held)

    decision = resolve(c.is_emergency, held)
    ctx.result.cancel(list(decision.to_cancel))
    # Emergencies still filling the cap once the normal work is gone
    if len(decision.to_flag) >= limit:
        ctx.result.flag(list(decision.to_flag))
    return _not_fired(ctx)


DEFAULT_RULES: tuple[Rule, ...] = (
    check_specialization,
    check_worker_double_booking,
    check_unit_occupancy,
    check_worker_unit_limit,
)


class ConflictDetector:
    """Validates candidate assignments against a snapshot of existing ones.

    Stateless between calls; the same instance can be shared freely.
    """

    def __init__(
        self,
        unit_assignment_limit: int = DEFAULT_UNIT_ASSIGNMENT_LIMIT,
        unit_limit_scope: UnitLimitScope = UnitLimitScope.SAME_DATE,
        rules: Sequence[Rule] = DEFAULT_RULES,
    ):
        if unit_assignment_limit < 1:
            raise ValueError("unit_assignment_limit must be at least 1")
        self._limit = unit_assignment_limit
        self._scope = UnitLimitScope(unit_limit_scope)
        self._rules = tuple(rules)

    @property
    def unit_limit_scope(self) -> UnitLimitScope:
        return self._scope

    @classmethod
    def from_settings(cls, cfg: Settings) -> ConflictDetector:
        return cls(
            unit_assignment_limit=cfg.unit_assignment_limit,
            unit_limit_scope=cfg.unit_limit_scope,
        )

    def validate(
        self,
        candidate: AssignmentCandidate,
        snapshot: AssignmentSnapshot | Iterable[ExistingAssignment],
    ) -> ValidationResult:
        """Run the rules in order and return the first failure, or a valid result.

        Only Scheduled/InProgress assignments count.  Entries belonging to
        the candidate's own request are ignored so a reassignment never
        collides with its previous slot.
        """
        active = AssignmentSnapshot.of(snapshot).active().excluding_request(candidate.request_id)
        ctx = RuleContext(
            candidate=candidate,
            active=active,
            same_day=active.on_date(candidate.scheduled_date),
            unit_assignment_limit=self._limit,
            unit_limit_scope=self._scope,
            result=ValidationResult(),
        )

        for rule in self._rules:
            fired, result = rule(ctx)
            if fired:
                logger.debug(
                    "Request %s: %s fired (%s)",
                    candidate.request_id, getattr(rule, "__name__", rule), result.conflict_type.value,
                )
                return result

        result = ctx.result
        if result.assignments_to_cancel_for_emergency:
            logger.info(
                "Emergency request %s displaces %d assignment(s) in %s Unit %s",
                candidate.request_id, len(result.assignments_to_cancel_for_emergency),
                candidate.property_code, candidate.unit_number,
            )
        if result.has_emergency_conflicts:
            logger.info(
                "Emergency request %s overlaps %d other emergency assignment(s)",
                candidate.request_id, len(result.emergency_conflicts),
            )
        return result


def validate_assignment(
    candidate: AssignmentCandidate,
    snapshot: AssignmentSnapshot | Iterable[ExistingAssignment],
    cfg: Settings | None = None,
) -> ValidationResult:
    """Validate with a detector configured from application settings."""
    if cfg is None:
        cfg = settings
    return ConflictDetector.from_settings(cfg).validate(candidate, snapshot)
