"""Port interface for worker lookup."""

from abc import ABC, abstractmethod

from rental_repairs.domain.entities.worker import Worker


class WorkerRepository(ABC):
    @abstractmethod
    async def get_by_email(self, email: str) -> Worker | None:
        ...
