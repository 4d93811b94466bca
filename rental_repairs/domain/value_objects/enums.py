"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class AssignmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_active(self) -> bool:
        return self in (AssignmentStatus.SCHEDULED, AssignmentStatus.IN_PROGRESS)


class ConflictType(str, Enum):
    NONE = "None"
    SPECIALIZATION_MISMATCH = "SpecializationMismatch"
    WORKER_DOUBLE_BOOKED = "WorkerDoubleBooked"
    UNIT_CONFLICT = "UnitConflict"
    WORKER_UNIT_LIMIT = "WorkerUnitLimit"


class Specialization(str, Enum):
    GENERAL_MAINTENANCE = "General Maintenance"
    PLUMBING = "Plumbing"
    ELECTRICAL = "Electrical"
    HVAC = "HVAC"
    CARPENTRY = "Carpentry"
    PAINTING = "Painting"
    LOCKSMITH = "Locksmith"
    APPLIANCE_REPAIR = "Appliance Repair"


class UnitLimitScope(str, Enum):
    """Which existing assignments count toward the per-worker unit cap."""

    SAME_DATE = "same_date"
    ANY_DATE = "any_date"
