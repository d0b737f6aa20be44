# /edura/services/submission_service.py

"""
Submission acceptance and manual grading.

A student submits once per assignment. Uniqueness is left to the store's
(assignment_id, student_id) constraint: a constraint violation on insert is
the canonical "already submitted" outcome, which also covers two concurrent
submits from the same student.

Deadline enforcement is a caller policy. `accept_submission` receives the
`allow_late_submission` flag and an injectable `now`, so nothing here reads
the wall clock unless the caller leaves `now` out.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from ..core.exceptions import AuthorizationError, GradingError, SubmissionError, SubmissionErrorReason
from ..core.results import Result
from ..models.assignment_model import (
    AssignmentType,
    FlashcardSubmissionContent,
    QuizContent,
    WrittenSubmissionContent,
)
from .assignment_helpers import grading
from .assignment_helpers.content_validation import parse_stored_content
from .database_helpers.assignment_repository_sql import DuplicateSubmissionError
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

MIN_GRADE = 0
MAX_GRADE = 100


def _as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; they are stored as UTC.
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _invalid(message: Optional[str] = None) -> Result:
    return Result.failure(SubmissionError(SubmissionErrorReason.INVALID_ANSWER, message=message))


def _load_answer(raw_answer: Any) -> Any:
    # A string that is not JSON is kept as-is for the per-variant check.
    if isinstance(raw_answer, str):
        try:
            return json.loads(raw_answer)
        except json.JSONDecodeError:
            return raw_answer
    return raw_answer


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# --- Answer Checks per Variant ---

def _check_quiz_answer(content: QuizContent, answer: Any) -> Result:
    if not isinstance(answer, dict):
        return _invalid("Quiz answers must be a map of question id to answer.")
    missing = [q.id for q in content.questions if _is_blank(answer.get(q.id))]
    if missing:
        return Result.failure(SubmissionError(SubmissionErrorReason.MISSING_ANSWERS, missing_count=len(missing)))
    return Result.success(answer)


def _check_written_answer(content, answer: Any) -> Result:
    try:
        parsed = WrittenSubmissionContent.model_validate(answer)
    except ValidationError:
        return _invalid()
    if _is_blank(parsed.text) and not parsed.files:
        return _invalid("Add some text or attach at least one file.")
    return Result.success(parsed.model_dump(mode="json"))


def _check_flashcard_answer(content, answer: Any) -> Result:
    try:
        parsed = FlashcardSubmissionContent.model_validate(answer)
    except ValidationError:
        return _invalid()
    if not parsed.completed:
        return _invalid("Only a completed flashcard set can be recorded.")
    return Result.success(parsed.model_dump(mode="json"))


_ANSWER_CHECKS: Dict[AssignmentType, Callable[[Any, Any], Result]] = {
    AssignmentType.QUIZ: _check_quiz_answer,
    AssignmentType.WRITTEN: _check_written_answer,
    AssignmentType.FLASHCARD: _check_flashcard_answer,
}


# --- Acceptance ---

def accept_submission(
    db: DatabaseService,
    assignment,
    student_id: str,
    raw_answer: Any,
    allow_late_submission: bool,
    now: Optional[datetime] = None,
) -> Result:
    """
    Validates and stores a student's one-shot submission. Quiz submissions are
    auto-graded on acceptance; written and flashcard submissions keep a NULL
    grade.
    """
    now = _as_utc(now) or datetime.now(timezone.utc)

    due_date = _as_utc(assignment.due_date)
    if not allow_late_submission and due_date is not None and now > due_date:
        return Result.failure(SubmissionError(SubmissionErrorReason.LATE))

    content = parse_stored_content(assignment.assignment_content)
    variant = AssignmentType(content.assignmentType)

    answer = _load_answer(raw_answer)
    if variant == AssignmentType.WRITTEN and isinstance(raw_answer, str) and not isinstance(answer, dict):
        # Plain essay text, including text that parses as a JSON scalar.
        answer = {"text": answer if isinstance(answer, str) else raw_answer}

    checked = _ANSWER_CHECKS[variant](content, answer)
    if not checked.ok:
        return checked

    grade = None
    graded_at = None
    if variant == AssignmentType.QUIZ:
        grade = grading.grade(content, checked.value).score
        graded_at = now

    record = {
        "submission_id": f"sub_{uuid.uuid4().hex[:12]}",
        "assignment_id": assignment.assignment_id,
        "student_id": student_id,
        "submission_content": checked.value,
        "submitted_at": now,
        "grade": grade,
        "graded_at": graded_at,
    }
    try:
        submission = db.add_submission(record)
    except DuplicateSubmissionError:
        logger.warning("Duplicate submission rejected: assignment=%s student=...%s", assignment.assignment_id, student_id[-6:])
        return Result.failure(SubmissionError(SubmissionErrorReason.DUPLICATE))
    return Result.success(submission)


def submit_assignment(
    db: DatabaseService,
    assignment_id: str,
    student_id: str,
    raw_answer: Any,
    allow_late_submission: bool,
    now: Optional[datetime] = None,
) -> Result:
    """Resolves the assignment for an enrolled student, then accepts the submission."""
    assignment = db.get_assignment(assignment_id)
    if assignment is None or not db.is_enrolled(student_id=student_id, class_id=assignment.class_id):
        return Result.failure(AuthorizationError())
    return accept_submission(db, assignment, student_id, raw_answer, allow_late_submission, now=now)


def get_student_submission(db: DatabaseService, assignment_id: str, student_id: str) -> Result:
    submission = db.get_submission_for_student(assignment_id, student_id)
    if submission is None:
        return Result.failure(AuthorizationError())
    return Result.success(submission)


# --- Manual Grading ---

def apply_manual_grade(
    db: DatabaseService,
    submission,
    grade: Any,
    feedback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Result:
    """
    Records a teacher's grade and feedback, overwriting any earlier values.
    The grade must be an integer in [0, 100]; anything else is rejected
    before the submission is touched.
    """
    if isinstance(grade, bool) or not isinstance(grade, int):
        return Result.failure(GradingError("Grade must be a whole number."))
    if not MIN_GRADE <= grade <= MAX_GRADE:
        return Result.failure(GradingError(f"Grade must be between {MIN_GRADE} and {MAX_GRADE}."))

    submission.grade = grade
    submission.feedback = feedback or None
    submission.graded_at = _as_utc(now) or datetime.now(timezone.utc)
    return Result.success(db.save_submission(submission))


def grade_written_submission(
    db: DatabaseService,
    submission_id: str,
    teacher_id: str,
    grade: Any,
    feedback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Result:
    submission = db.get_submission(submission_id)
    if submission is None:
        return Result.failure(AuthorizationError())

    assignment = db.get_assignment(submission.assignment_id)
    if assignment is None or not db.get_class_for_teacher(class_id=assignment.class_id, teacher_id=teacher_id):
        return Result.failure(AuthorizationError())

    if assignment.assignment_type != AssignmentType.WRITTEN.value:
        return Result.failure(GradingError("Only written submissions are graded manually.", field="assignmentType"))

    result = apply_manual_grade(db, submission, grade, feedback=feedback, now=now)
    if not result.ok:
        logger.warning("Rejected manual grade for submission %s: %s", submission_id, result.error.message)
    return result
