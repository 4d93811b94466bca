"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod
from datetime import date

from rental_repairs.domain.entities.assignment import ExistingAssignment
from rental_repairs.domain.policies.cancellation import CancelledAssignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def get_active_on_date(self, scheduled_date: date) -> list[ExistingAssignment]:
        ...

    @abstractmethod
    async def get_active_in_unit(self, property_code: str, unit_number: str) -> list[ExistingAssignment]:
        ...

    @abstractmethod
    async def save(self, assignment: ExistingAssignment) -> ExistingAssignment:
        ...

    @abstractmethod
    async def cancel(self, cancellation: CancelledAssignment) -> None:
        ...
