"""Domain errors raised by the record store and the webhook gateway."""
from __future__ import annotations


class RecordError(Exception):
    """Base class for record store failures."""


class NotFoundError(RecordError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidStatusError(RecordError, ValueError):
    def __init__(self, status: str):
        super().__init__(f"unsupported status '{status}'")
        self.status = status


class AuthorizationError(RecordError):
    """Raised when the actor may not perform the operation.

    The message never says whether the target record exists.
    """

    def __init__(self, message: str = "not permitted"):
        super().__init__(message)
