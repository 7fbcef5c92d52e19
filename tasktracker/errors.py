from enum import Enum


class AuthFailure(str, Enum):
    MISSING = "missing"
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


class AuthError(Exception):
    """Bearer credential rejected.

    `reason` is for server-side logs only; every AuthError is answered with
    the same 401 body.
    """

    def __init__(self, reason: AuthFailure):
        super().__init__(reason.value)
        self.reason = reason


class TaskNotFound(Exception):
    """No task with this id belongs to the caller (it may not exist at all)."""


class TransientStoreError(Exception):
    """The store could not be reached or dropped the connection."""
