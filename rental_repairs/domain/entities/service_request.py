"""ServiceRequest entity — a tenant's repair request awaiting a worker."""

from dataclasses import dataclass


@dataclass
class ServiceRequest:
    id: str
    property_code: str
    unit_number: str
    title: str
    description: str | None = None
    is_emergency: bool = False
