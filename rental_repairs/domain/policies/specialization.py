"""SpecializationPolicy — canonical work categories, compatibility and inference.

One alias table serves both directions of the lookup: role-style terms
("Electrician", "HVAC Technician") and work-style terms ("Electrical",
"Heating") resolve to the same canonical ``Specialization``.  Required
specialization inference from request text uses a separate keyword table
matched on word boundaries, so "repair" never matches "air".
"""

from __future__ import annotations

import re

from rental_repairs.domain.value_objects.enums import Specialization

GENERAL_MAINTENANCE = Specialization.GENERAL_MAINTENANCE.value

SPECIALIZATION_ALIASES: dict[str, Specialization] = {
    "plumber": Specialization.PLUMBING,
    "plumbing": Specialization.PLUMBING,
    "electrician": Specialization.ELECTRICAL,
    "electrical": Specialization.ELECTRICAL,
    "hvac": Specialization.HVAC,
    "hvac technician": Specialization.HVAC,
    "heating": Specialization.HVAC,
    "cooling": Specialization.HVAC,
    "painter": Specialization.PAINTING,
    "painting": Specialization.PAINTING,
    "carpenter": Specialization.CARPENTRY,
    "carpentry": Specialization.CARPENTRY,
    "locksmith": Specialization.LOCKSMITH,
    "appliance repair": Specialization.APPLIANCE_REPAIR,
    "appliance technician": Specialization.APPLIANCE_REPAIR,
    "general maintenance": Specialization.GENERAL_MAINTENANCE,
    "maintenance": Specialization.GENERAL_MAINTENANCE,
}

# Keywords per category; a trailing "*" marks a stem ("plumb*" ~ plumber, plumbing).
_KEYWORDS: dict[Specialization, tuple[str, ...]] = {
    Specialization.APPLIANCE_REPAIR: (
        "appliance", "refrigerator", "fridge", "washer", "dryer", "dishwasher",
        "oven", "stove", "microwave", "freezer",
    ),
    Specialization.LOCKSMITH: (
        "lock", "key", "deadbolt", "locked out", "lockout", "unlock", "rekey", "security",
    ),
    Specialization.PLUMBING: (
        "plumb*", "leak*", "water", "drain*", "pipe", "faucet", "toilet", "sink",
        "clog*", "drip*", "flush*", "sewer",
    ),
    Specialization.ELECTRICAL: (
        "electric*", "power", "outlet", "wiring", "wire", "light", "switch", "breaker",
        "circuit", "lamp", "fixture", "voltage", "spark*",
    ),
    Specialization.HVAC: (
        "hvac", "furnace", "thermostat", "ventilation", "air conditioning",
        "air conditioner", "heating system", "cooling system", "heat pump",
    ),
    Specialization.PAINTING: ("paint*", "repaint*", "brush", "roller", "colou?r"),
    Specialization.CARPENTRY: ("wood*", "cabinet", "carpent*", "shelf", "shelves"),
}

# More specific categories first: appliances before plumbing ("dishwasher
# leak"), locks before anything mentioning a door.
INFERENCE_PRIORITY: tuple[Specialization, ...] = (
    Specialization.APPLIANCE_REPAIR,
    Specialization.LOCKSMITH,
    Specialization.PLUMBING,
    Specialization.ELECTRICAL,
    Specialization.HVAC,
    Specialization.PAINTING,
    Specialization.CARPENTRY,
)


def _keyword_pattern(keyword: str) -> str:
    if keyword.endswith("*"):
        return rf"\b{keyword[:-1]}\w*"
    words = r"\s+".join(keyword.split())
    return rf"\b{words}(?:s|es|ed|ing)?\b"


_KEYWORD_PATTERNS: dict[Specialization, re.Pattern[str]] = {
    spec: re.compile("|".join(_keyword_pattern(k) for k in keywords), re.IGNORECASE)
    for spec, keywords in _KEYWORDS.items()
}


def _alias_key(text: str) -> str:
    return " ".join(text.split()).lower()


def canonicalize(text: str | None) -> str:
    """Map a free-text specialization or role to its canonical category.

    Blank input has no category and returns "".  Text with no alias is its
    own category (stripped), so it only ever matches itself.
    """
    if not text or not text.strip():
        return ""
    spec = SPECIALIZATION_ALIASES.get(_alias_key(text))
    return spec.value if spec is not None else text.strip()


def is_compatible(worker_specialization: str | None, required_specialization: str | None) -> bool:
    """Can a worker with this specialization take work of the required kind?

    True when nothing is required, when the worker is General Maintenance
    (wildcard), or when both sides share a canonical category.  A worker with
    no recorded specialization only qualifies for General Maintenance work.
    """
    required = canonicalize(required_specialization)
    if not required:
        return True

    worker = canonicalize(worker_specialization)
    if not worker:
        return required == GENERAL_MAINTENANCE
    if worker == GENERAL_MAINTENANCE:
        return True
    return worker.lower() == required.lower()


def determine_required_specialization(title: str | None, description: str | None) -> Specialization:
    """Infer which specialization a repair request needs from its text.

    Categories are tried in ``INFERENCE_PRIORITY`` order; the first one with
    a keyword hit wins.  No hit means General Maintenance.
    """
    text = " ".join(p for p in (title, description) if p and p.strip())
    if not text:
        return Specialization.GENERAL_MAINTENANCE

    for spec in INFERENCE_PRIORITY:
        if _KEYWORD_PATTERNS[spec].search(text):
            return spec
    return Specialization.GENERAL_MAINTENANCE


def display_names() -> list[str]:
    return [spec.value for spec in Specialization]
