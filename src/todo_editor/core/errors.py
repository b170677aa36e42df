# src/todo_editor/core/errors.py

"""
Error kinds surfaced to the user.

All of them are terminal for the operation that raised them (nothing is retried):
- TaskValidationError: caught before any request is made,
- TransportError: the request never produced a usable response,
- ApplicationError: the backend answered, but not with what we asked for.
"""

from __future__ import annotations


class TaskError(RuntimeError):
    """Base class for errors the session turns into a user-facing message."""


class TaskValidationError(TaskError):
    pass


class TaskStoreError(TaskError):
    pass


class TransportError(TaskStoreError):
    """Network unreachable, timeout, or a response body that could not be decoded."""


class ApplicationError(TaskStoreError):
    """Non-2xx status, or a 2xx list response without a task array."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, body: str = "") -> ApplicationError:
        msg = f"HTTP error! status: {status_code}"
        if body:
            msg += f", body: {body}"
        return cls(msg, status_code=status_code, body=body)


EMPTY_TITLE_MESSAGE = "Please enter a task title."


def friendly_error_message(operation: str, err: Exception) -> str:
    """Single-line message shown in place of the previous error."""
    if isinstance(err, TaskValidationError):
        return str(err) or EMPTY_TITLE_MESSAGE
    msg = str(err).strip() or err.__class__.__name__
    return f"{operation} error: {msg}"
