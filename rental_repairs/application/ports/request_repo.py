"""Port interface for service request lookup."""

from abc import ABC, abstractmethod

from rental_repairs.domain.entities.service_request import ServiceRequest


class ServiceRequestRepository(ABC):
    @abstractmethod
    async def get_by_id(self, request_id: str) -> ServiceRequest | None:
        ...
