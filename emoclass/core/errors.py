"""Error taxonomy for check-in ingestion and alerting.

Every error carries the HTTP status and a stable ``error_code`` so the
exception handlers in ``emoclass.main`` can render them without a lookup
table. Detector-side errors (``StudentNotFound``, ``DispatchFailure``) are
only ever logged when they happen in the background trigger.
"""
from typing import Optional


class EmoClassError(Exception):
    """Base class for all domain errors.

    Attributes:
        message: Human-readable, user-facing description.
        details: Optional extra context for logs.
    """

    status_code: int = 400
    error_code: str = "ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidInput(EmoClassError):
    """Missing or malformed student id, emotion or note."""

    error_code = "INVALID_INPUT"


class InvalidEmotion(EmoClassError):
    """Emotion is not one of the five allowed tags."""

    error_code = "INVALID_EMOTION"


class NoteTooLong(EmoClassError):
    error_code = "NOTE_TOO_LONG"


class AlreadyCheckedInToday(EmoClassError):
    error_code = "ALREADY_CHECKED_IN"


class StudentNotFound(EmoClassError):
    status_code = 404
    error_code = "STUDENT_NOT_FOUND"


class PersistenceFailure(EmoClassError):
    """Storage read/write failed. ``message`` stays generic; the cause goes in the log."""

    status_code = 500
    error_code = "PERSISTENCE_FAILURE"


class DispatchFailure(EmoClassError):
    """Notification channel unreachable, rejected the message or is not configured."""

    status_code = 502
    error_code = "DISPATCH_FAILURE"
