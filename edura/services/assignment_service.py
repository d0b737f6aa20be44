# /edura/services/assignment_service.py

"""
Teacher-owned assignment lifecycle: create, read, update, delete, plus the
student and manager read paths.

Ownership is checked through the class an assignment belongs to. Every failed
ownership or enrollment check returns the same AuthorizationError as a missing
row, so callers cannot probe for ids they do not own.
"""

import logging
import uuid
from typing import List

from ..core.exceptions import AuthorizationError
from ..core.results import Result
from ..models.assignment_model import AssignmentCreate, AssignmentType, AssignmentUpdate
from ..models.submission_model import AssignmentStatus
from .assignment_helpers.content_validation import validate_content
from .database_service import DatabaseService
from .scope_service import ScopeResolver

logger = logging.getLogger(__name__)

# API field name -> ORM column name for partial updates.
_UPDATE_COLUMNS = {
    "title": "title",
    "description": "description",
    "dueDate": "due_date",
    "testingDuration": "testing_duration",
}

# Fields backed by NOT NULL columns; a null in an update means "leave as is".
_REQUIRED_FIELDS = {"title", "assignmentType", "assignmentContent"}


def _denied() -> Result:
    return Result.failure(AuthorizationError())


# --- Teacher Operations ---

def create_assignment(class_id: str, teacher_id: str, data: AssignmentCreate, db: DatabaseService) -> Result:
    """
    Creates an assignment in a class owned by the teacher. Fails with
    AuthorizationError when the class is not theirs, or with the list of
    FieldErrors when the content does not validate.
    """
    if not db.get_class_for_teacher(class_id=class_id, teacher_id=teacher_id):
        return _denied()

    validated = validate_content(data.assignmentType, data.assignmentContent)
    if not validated.ok:
        return validated

    is_quiz = data.assignmentType == AssignmentType.QUIZ
    record = {
        "assignment_id": f"asg_{uuid.uuid4().hex[:12]}",
        "class_id": class_id,
        "title": data.title,
        "description": data.description,
        "assignment_type": data.assignmentType.value,
        "assignment_content": validated.value.model_dump(mode="json"),
        "due_date": data.dueDate,
        # A time limit only applies to quizzes.
        "testing_duration": data.testingDuration if is_quiz else None,
    }
    assignment = db.add_assignment(record)
    logger.info("Created %s assignment %s in class %s", record["assignment_type"], assignment.assignment_id, class_id)
    return Result.success(assignment)


def get_assignment_for_teacher(assignment_id: str, teacher_id: str, db: DatabaseService) -> Result:
    assignment = db.get_assignment(assignment_id)
    if assignment is None:
        return _denied()
    if not db.get_class_for_teacher(class_id=assignment.class_id, teacher_id=teacher_id):
        return _denied()
    return Result.success(assignment)


def list_class_assignments(class_id: str, teacher_id: str, db: DatabaseService) -> Result:
    if not db.get_class_for_teacher(class_id=class_id, teacher_id=teacher_id):
        return _denied()
    return Result.success(db.get_assignments_by_class_id(class_id))


def update_assignment(assignment_id: str, teacher_id: str, update: AssignmentUpdate, db: DatabaseService) -> Result:
    """
    Applies a partial update. When the type or the content changes, the
    effective content is re-validated against the effective type.
    """
    update_data = {
        field: value for field, value in update.model_dump(exclude_unset=True).items()
        if value is not None or field not in _REQUIRED_FIELDS
    }
    if not update_data:
        raise ValueError("No update data provided.")

    owned = get_assignment_for_teacher(assignment_id, teacher_id, db)
    if not owned.ok:
        return owned
    assignment = owned.value

    changes = {column: update_data[field] for field, column in _UPDATE_COLUMNS.items() if field in update_data}

    if "assignmentType" in update_data or "assignmentContent" in update_data:
        variant = update_data.get("assignmentType") or AssignmentType(assignment.assignment_type)
        payload = update_data.get("assignmentContent")
        if payload is None:
            payload = assignment.assignment_content
        validated = validate_content(variant, payload)
        if not validated.ok:
            return validated
        changes["assignment_type"] = AssignmentType(variant).value
        changes["assignment_content"] = validated.value.model_dump(mode="json")

    effective_type = changes.get("assignment_type", assignment.assignment_type)
    if effective_type != AssignmentType.QUIZ.value:
        changes["testing_duration"] = None

    return Result.success(db.update_assignment(assignment, changes))


def delete_assignment(assignment_id: str, teacher_id: str, db: DatabaseService) -> Result:
    owned = get_assignment_for_teacher(assignment_id, teacher_id, db)
    if not owned.ok:
        return owned
    db.delete_assignment(owned.value)
    logger.info("Deleted assignment %s and its submissions", assignment_id)
    return Result.success(True)


def list_assignment_submissions(assignment_id: str, teacher_id: str, db: DatabaseService) -> Result:
    owned = get_assignment_for_teacher(assignment_id, teacher_id, db)
    if not owned.ok:
        return owned
    return Result.success(db.get_submissions_by_assignment_id(assignment_id))


# --- Student Operations ---

def get_assignment_for_student(assignment_id: str, student_id: str, db: DatabaseService) -> Result:
    assignment = db.get_assignment(assignment_id)
    if assignment is None or not db.is_enrolled(student_id=student_id, class_id=assignment.class_id):
        return _denied()
    return Result.success(assignment)


def get_student_assignment_statuses(class_id: str, student_id: str, db: DatabaseService) -> Result[List[AssignmentStatus], AuthorizationError]:
    if not db.is_enrolled(student_id=student_id, class_id=class_id):
        return _denied()

    statuses = []
    for assignment in db.get_assignments_by_class_id(class_id):
        submission = db.get_submission_for_student(assignment.assignment_id, student_id)
        statuses.append(AssignmentStatus(
            assignmentId=assignment.assignment_id,
            title=assignment.title,
            description=assignment.description,
            assignmentType=assignment.assignment_type,
            dueDate=assignment.due_date,
            createdAt=assignment.created_at,
            submitted=submission is not None,
            submittedAt=submission.submitted_at if submission else None,
            grade=submission.grade if submission else None,
        ))
    return Result.success(statuses)


# --- Manager Operations ---

def list_class_assignments_for_manager(class_id: str, manager_id: str, resolver: ScopeResolver) -> Result:
    guard = resolver.authorize_class(class_id=class_id, manager_id=manager_id)
    if not guard.ok:
        return guard
    return Result.success(resolver.db.get_assignments_by_class_id(class_id))
