"""Worker entity — a maintenance worker who can be scheduled into units."""

from dataclasses import dataclass

from rental_repairs.domain.policies.specialization import canonicalize


@dataclass
class Worker:
    email: str
    name: str
    specialization: str = ""
    is_active: bool = True

    def category(self) -> str:
        return canonicalize(self.specialization)
