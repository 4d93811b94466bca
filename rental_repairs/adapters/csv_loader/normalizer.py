"""CSV value normalization — headers, blanks, yes/no flags and dates."""

from __future__ import annotations

import re
from datetime import date, datetime

from rental_repairs.domain.value_objects.enums import AssignmentStatus

_TRUE_VALUES = {"1", "true", "yes", "y", "emergency"}
_FALSE_VALUES = {"0", "false", "no", "n", ""}

# Keys are lowercased with spaces, underscores and dashes removed
_STATUS_VALUES = {
    "scheduled": AssignmentStatus.SCHEDULED,
    "inprogress": AssignmentStatus.IN_PROGRESS,
    "completed": AssignmentStatus.COMPLETED,
    "cancelled": AssignmentStatus.CANCELLED,
    "canceled": AssignmentStatus.CANCELLED,
}

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y",
    "%d.%m.%Y",
)


def normalize_column_name(name: str) -> str:
    """Normalize a CSV header to snake_case.

    - Removes BOM characters (\\ufeff)
    - Splits CamelCase ("WorkerEmail" -> "worker_email")
    - Collapses whitespace, dashes and non-breaking spaces to one underscore
    - Lowercases and drops anything that's not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    name = re.sub(r"[^\w]", "", name.lower())
    return name.strip("_")


def clean_string(value: str | None) -> str | None:
    """Blank cells (missing or whitespace only) become None."""
    stripped = (value or "").strip()
    return stripped or None


def parse_bool(raw: str | None) -> bool:
    """Parse spreadsheet-style flags ("Yes", "TRUE", "1", blank)."""
    key = (raw or "").strip().lower()
    if key in _TRUE_VALUES:
        return True
    if key in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a yes/no value: {raw!r}")


def parse_status(raw: str | None) -> AssignmentStatus:
    """Parse an assignment status ("Scheduled", "in_progress", "IN PROGRESS").

    Blank means Scheduled.
    """
    key = re.sub(r"[\s_\-]+", "", (raw or "").lower())
    if not key:
        return AssignmentStatus.SCHEDULED
    try:
        return _STATUS_VALUES[key]
    except KeyError:
        raise ValueError(f"Unknown assignment status: {raw!r}") from None


def parse_date(raw: str | None) -> date:
    """Parse a scheduled date, dropping any time-of-day part."""
    if not raw or not raw.strip():
        raise ValueError("Missing date")
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw.strip(), fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Could not parse date: {raw!r}")
