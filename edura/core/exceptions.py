# /edura/core/exceptions.py

"""
The error taxonomy shared by the scope resolver and the assignment engine.

Recoverable errors (authorization, submission, grading) are carried inside a
`Result` and handed back to the caller. Only programming errors and store
outages are raised.
"""

from enum import Enum
from typing import Optional


class EduraError(Exception):
    """Base class for every error raised or returned by the core."""

    default_message = "An unexpected error occurred."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- Recoverable, returned inside a Result ---

class AuthorizationError(EduraError):
    # Same message as a missing resource.
    default_message = "Not found or access denied"


class SubmissionErrorReason(str, Enum):
    DUPLICATE = "duplicate"
    MISSING_ANSWERS = "missing_answers"
    LATE = "late"
    INVALID_ANSWER = "invalid_answer"


class SubmissionError(EduraError):
    def __init__(self, reason: SubmissionErrorReason, message: Optional[str] = None, missing_count: int = 0):
        self.reason = reason
        self.missing_count = missing_count
        super().__init__(message or self._message_for(reason, missing_count))

    @staticmethod
    def _message_for(reason: SubmissionErrorReason, missing_count: int) -> str:
        if reason == SubmissionErrorReason.DUPLICATE:
            return "You have already submitted this assignment"
        if reason == SubmissionErrorReason.MISSING_ANSWERS:
            noun = "question" if missing_count == 1 else "questions"
            return f"{missing_count} {noun} left unanswered"
        if reason == SubmissionErrorReason.LATE:
            return "The due date for this assignment has passed"
        return "The submission content is not valid for this assignment"


class GradingError(EduraError):
    def __init__(self, message: str, field: str = "grade"):
        self.field = field
        super().__init__(message)


# --- Programming errors, raised ---

class UnsupportedVariant(EduraError):
    default_message = "Only quiz content can be auto-graded."


class EmptyQuizError(EduraError):
    default_message = "A quiz with zero questions cannot be graded."


# --- Transient, raised, retryable by the caller ---

class StoreUnavailable(EduraError):
    default_message = "The data store is temporarily unavailable."
