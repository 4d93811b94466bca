"""ScheduleServiceWorkUseCase — validate and book a worker for a repair request."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from rental_repairs.application.ports.assignment_repo import AssignmentRepository
from rental_repairs.application.ports.request_repo import ServiceRequestRepository
from rental_repairs.application.ports.worker_repo import WorkerRepository
from rental_repairs.domain.entities.assignment import AssignmentCandidate, ExistingAssignment
from rental_repairs.domain.exceptions import (
    RequestNotFoundError,
    WorkerNotAvailableError,
    WorkerNotFoundError,
)
from rental_repairs.domain.policies.cancellation import process_emergency_override
from rental_repairs.domain.policies.conflict_detection import ConflictDetector
from rental_repairs.domain.policies.specialization import determine_required_specialization
from rental_repairs.domain.value_objects.enums import AssignmentStatus, ConflictType, UnitLimitScope

logger = logging.getLogger(__name__)


@dataclass
class ScheduleServiceWorkCommand:
    request_id: str
    worker_email: str
    scheduled_date: date
    work_order_number: str


@dataclass
class SchedulingOutcome:
    """Summary of one scheduling attempt."""

    request_id: str
    scheduled: bool
    conflict_type: ConflictType = ConflictType.NONE
    error: str | None = None
    required_specialization: str | None = None
    cancelled_request_ids: list[str] = field(default_factory=list)
    emergency_conflicts: list[ExistingAssignment] = field(default_factory=list)


class ScheduleServiceWorkUseCase:
    """Orchestrates one scheduling decision: load → validate → displace → save.

    The read of existing assignments and the writes that follow are not
    atomic here.  Callers whose store has concurrent writers must run
    ``execute`` inside their own per-(property, unit, date) lock or
    transaction.
    """

    def __init__(
        self,
        request_repo: ServiceRequestRepository,
        worker_repo: WorkerRepository,
        assignment_repo: AssignmentRepository,
        detector: ConflictDetector | None = None,
    ):
        self._requests = request_repo
        self._workers = worker_repo
        self._assignments = assignment_repo
        self._detector = detector or ConflictDetector()

    async def execute(self, command: ScheduleServiceWorkCommand) -> SchedulingOutcome:
        """Schedule a worker for a request.

        Pipeline:
        1. Load request and worker
        2. Infer required specialization from the request text
        3. Snapshot active assignments
        4. Validate against the conflict rules
        5. Cancel work displaced by an emergency
        6. Persist the new assignment

        Raises:
            RequestNotFoundError / WorkerNotFoundError: unknown ids.
            WorkerNotAvailableError: the worker is inactive.
            InvalidAssignmentError: malformed command data.
        """
        logger.info(
            "Scheduling request %s with worker %s on %s",
            command.request_id, command.worker_email, command.scheduled_date,
        )

        # Step 1: Load request and worker
        request = await self._requests.get_by_id(command.request_id)
        if request is None:
            raise RequestNotFoundError(command.request_id)
        worker = await self._workers.get_by_email(command.worker_email)
        if worker is None:
            raise WorkerNotFoundError(command.worker_email)
        if not worker.is_active:
            raise WorkerNotAvailableError(worker.email, "worker is inactive")

        # Step 2: Required specialization
        required = determine_required_specialization(request.title, request.description)

        candidate = AssignmentCandidate(
            request_id=request.id,
            property_code=request.property_code,
            unit_number=request.unit_number,
            scheduled_date=command.scheduled_date,
            worker_email=worker.email,
            worker_specialization=worker.specialization,
            required_specialization=required.value,
            is_emergency=request.is_emergency,
        )

        # Step 3: Snapshot
        existing = await self._assignments.get_active_on_date(candidate.scheduled_date)
        if self._detector.unit_limit_scope == UnitLimitScope.ANY_DATE:
            seen = {a.request_id for a in existing}
            in_unit = await self._assignments.get_active_in_unit(
                candidate.property_code, candidate.unit_number
            )
            existing = existing + [a for a in in_unit if a.request_id not in seen]

        # Step 4: Validate
        validation = self._detector.validate(candidate, existing)
        if not validation.is_valid:
            logger.info(
                "Request %s not scheduled: %s (%s)",
                request.id, validation.conflict_type.value, validation.error_message,
            )
            return SchedulingOutcome(
                request_id=request.id,
                scheduled=False,
                conflict_type=validation.conflict_type,
                error=validation.error_message,
                required_specialization=required.value,
            )

        # Step 5: Emergency override
        cancelled_ids: list[str] = []
        if validation.assignments_to_cancel_for_emergency:
            cancellation = process_emergency_override(validation.assignments_to_cancel_for_emergency)
            for cancelled in cancellation.cancelled_assignments:
                await self._assignments.cancel(cancelled)
                cancelled_ids.append(cancelled.request_id)
                logger.info("Emergency override: cancelled request %s", cancelled.request_id)
            logger.info(
                "Emergency request %s cancelled %d normal assignment(s)",
                request.id, len(cancelled_ids),
            )

        if validation.has_emergency_conflicts:
            logger.warning(
                "Emergency request %s conflicts with %d other emergency assignment(s) in %s Unit %s",
                request.id, len(validation.emergency_conflicts),
                candidate.property_code, candidate.unit_number,
            )

        # Step 6: Persist
        await self._assignments.save(
            ExistingAssignment(
                request_id=request.id,
                property_code=candidate.property_code,
                unit_number=candidate.unit_number,
                worker_email=candidate.worker_email,
                scheduled_date=candidate.scheduled_date,
                status=AssignmentStatus.SCHEDULED,
                is_emergency=candidate.is_emergency,
                work_order_number=command.work_order_number,
            )
        )
        logger.info(
            "Request %s → Worker %s (%s Unit %s, %s)",
            request.id, worker.email, candidate.property_code,
            candidate.unit_number, candidate.scheduled_date,
        )

        return SchedulingOutcome(
            request_id=request.id,
            scheduled=True,
            required_specialization=required.value,
            cancelled_request_ids=cancelled_ids,
            emergency_conflicts=list(validation.emergency_conflicts),
        )
