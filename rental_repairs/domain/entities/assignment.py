"""Assignment entities — scheduled work already on the books, and a proposed new slot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from rental_repairs.domain.exceptions import InvalidAssignmentError
from rental_repairs.domain.value_objects.enums import AssignmentStatus


def _require_text(field_name: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidAssignmentError(f"{field_name} must be a non-empty string")
    return value.strip()


def _as_date(value: object) -> date:
    # datetime is a date subclass; time-of-day is irrelevant for scheduling
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidAssignmentError(f"scheduled_date must be a date, got {value!r}")


def _as_status(value: object) -> AssignmentStatus:
    if isinstance(value, AssignmentStatus):
        return value
    try:
        return AssignmentStatus(str(value).strip())
    except ValueError:
        raise InvalidAssignmentError(f"Unknown assignment status: {value!r}") from None


@dataclass(frozen=True)
class ExistingAssignment:
    """A piece of work that is already scheduled for a worker in a unit."""

    request_id: str
    property_code: str
    unit_number: str
    worker_email: str
    scheduled_date: date
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    is_emergency: bool = False
    work_order_number: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_id", _require_text("request_id", self.request_id))
        object.__setattr__(self, "property_code", _require_text("property_code", self.property_code))
        object.__setattr__(self, "unit_number", _require_text("unit_number", self.unit_number))
        object.__setattr__(self, "worker_email", _require_text("worker_email", self.worker_email))
        object.__setattr__(self, "scheduled_date", _as_date(self.scheduled_date))
        object.__setattr__(self, "status", _as_status(self.status))

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def unit_key(self) -> tuple[str, str]:
        return (self.property_code, self.unit_number)

    def is_for_worker(self, worker_email: str) -> bool:
        return self.worker_email.lower() == worker_email.strip().lower()


@dataclass(frozen=True)
class AssignmentCandidate:
    """A proposed (worker, unit, date) assignment awaiting validation."""

    request_id: str
    property_code: str
    unit_number: str
    scheduled_date: date
    worker_email: str
    worker_specialization: str = ""
    required_specialization: str = ""  # empty = no constraint
    is_emergency: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_id", _require_text("request_id", self.request_id))
        object.__setattr__(self, "property_code", _require_text("property_code", self.property_code))
        object.__setattr__(self, "unit_number", _require_text("unit_number", self.unit_number))
        object.__setattr__(self, "worker_email", _require_text("worker_email", self.worker_email))
        object.__setattr__(self, "scheduled_date", _as_date(self.scheduled_date))
        object.__setattr__(self, "worker_specialization", self.worker_specialization or "")
        object.__setattr__(self, "required_specialization", self.required_specialization or "")

    @property
    def unit_key(self) -> tuple[str, str]:
        return (self.property_code, self.unit_number)
