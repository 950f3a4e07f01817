"""Queue errors.

Every error carries a stable `code` and a human-readable `message`. Views
show the message directly; the code is for anything that needs to branch.
"""

from __future__ import annotations


class QueueError(Exception):
    code = "queue_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(QueueError):
    """The submitted name is empty or whitespace only."""

    code = "invalid_name"


class DuplicateError(QueueError):
    """A member with the same identity key is already queued."""

    code = "duplicate"


class NotFoundError(QueueError):
    """No queued member matches the identity key."""

    code = "not_found"
