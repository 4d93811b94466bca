"""Domain exceptions — bad input, not scheduling conflicts.

Scheduling conflicts are reported through ``ValidationResult``; these are
raised only when the input itself is malformed, a referenced record is
missing, or the worker cannot take work at all.
"""


class InvalidAssignmentError(ValueError):
    """An assignment or candidate was built from malformed data."""


class RequestNotFoundError(LookupError):
    def __init__(self, request_id: str):
        super().__init__(f"Service request {request_id} not found")
        self.request_id = request_id


class WorkerNotFoundError(LookupError):
    def __init__(self, worker_email: str):
        super().__init__(f"Worker with email {worker_email} not found")
        self.worker_email = worker_email


class WorkerNotAvailableError(Exception):
    def __init__(self, worker_email: str, reason: str):
        super().__init__(f"Worker {worker_email} is not available: {reason}")
        self.worker_email = worker_email
        self.reason = reason
