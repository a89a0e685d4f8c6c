from __future__ import annotations

from typing import Optional

from .enums import WindowReason


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the request carries no authenticated identity."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class WindowViolation(ValidationError):
    """Check-in attempted outside the allowed shift window."""

    def __init__(self, reason: WindowReason, *, window_start: str, window_end: str):
        self.reason = reason
        self.window_start = window_start
        self.window_end = window_end
        super().__init__(self._message())

    def _message(self) -> str:
        if self.reason == WindowReason.TOO_EARLY:
            return f"Check-in is only allowed from {self.window_start} to {self.window_end}. You're too early!"
        return f"Shift has ended. You cannot check in after {self.window_end}."


class AlreadyCheckedIn(ValidationError):
    def __init__(self, message: str = "Already checked in today"):
        super().__init__(message)


class AlreadyCheckedOut(ValidationError):
    def __init__(self, message: str = "Already checked out today"):
        super().__init__(message)


class NotCheckedIn(ValidationError):
    def __init__(self, message: str = "Must check in before checking out"):
        super().__init__(message)


class StoreFailure(Exception):
    """The data layer rejected a read or write.

    Carries the driver's message; the HTTP layer never shows it to users.
    """

    def __init__(self, message: str, *, errno: Optional[int] = None):
        self.errno = errno
        super().__init__(message)


class DuplicateRecord(StoreFailure):
    """A unique constraint (e.g. one attendance row per user and date) was violated."""
