# /edura/services/database_helpers/assignment_repository_sql.py

"""
This module contains the SQLAlchemy queries for the Assignment and Submission
tables.

Ownership checks are done by the calling services through the class that an
assignment belongs to; this layer only filters by keys.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edura.db.models.assignment_models import Assignment, Submission
from .store_errors import translate_store_errors


class DuplicateSubmissionError(Exception):
    """The store rejected a second submission for the same (assignment, student)."""


class AssignmentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Assignment Methods ---

    @translate_store_errors
    def add_assignment(self, record: Dict) -> Assignment:
        new_assignment = Assignment(**record)
        self.db.add(new_assignment)
        self.db.commit()
        self.db.refresh(new_assignment)
        return new_assignment

    @translate_store_errors
    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return self.db.query(Assignment).filter(Assignment.assignment_id == assignment_id).first()

    @translate_store_errors
    def get_assignments_by_class_id(self, class_id: str) -> List[Assignment]:
        return (
            self.db.query(Assignment)
            .filter(Assignment.class_id == class_id)
            .order_by(Assignment.created_at)
            .all()
        )

    @translate_store_errors
    def get_assignments_by_class_ids(self, class_ids: Iterable[str]) -> List[Assignment]:
        class_ids = list(class_ids)
        if not class_ids:
            return []
        return self.db.query(Assignment).filter(Assignment.class_id.in_(class_ids)).all()

    @translate_store_errors
    def update_assignment(self, assignment: Assignment, data: Dict) -> Assignment:
        for key, value in data.items():
            setattr(assignment, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValueError(f"Assignment update rejected by the store: {e.orig}") from e
        self.db.refresh(assignment)
        return assignment

    @translate_store_errors
    def delete_assignment(self, assignment: Assignment) -> bool:
        # The cascade on the relationship removes the submissions.
        self.db.delete(assignment)
        self.db.commit()
        return True

    # --- Submission Methods ---

    @translate_store_errors
    def add_submission(self, record: Dict) -> Submission:
        """
        Inserts a submission. A violation of the (assignment_id, student_id)
        unique constraint is re-raised as DuplicateSubmissionError after the
        session has been rolled back.
        """
        new_submission = Submission(**record)
        self.db.add(new_submission)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateSubmissionError(str(e.orig)) from e
        self.db.refresh(new_submission)
        return new_submission

    @translate_store_errors
    def get_submission(self, submission_id: str) -> Optional[Submission]:
        return self.db.query(Submission).filter(Submission.submission_id == submission_id).first()

    @translate_store_errors
    def get_submission_for_student(self, assignment_id: str, student_id: str) -> Optional[Submission]:
        return (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id, Submission.student_id == student_id)
            .first()
        )

    @translate_store_errors
    def get_submissions_by_assignment_id(self, assignment_id: str) -> List[Submission]:
        return (
            self.db.query(Submission)
            .filter(Submission.assignment_id == assignment_id)
            .order_by(Submission.submitted_at)
            .all()
        )

    @translate_store_errors
    def get_submissions_by_assignment_ids(self, assignment_ids: Iterable[str]) -> List[Submission]:
        assignment_ids = list(assignment_ids)
        if not assignment_ids:
            return []
        return self.db.query(Submission).filter(Submission.assignment_id.in_(assignment_ids)).all()

    @translate_store_errors
    def save_submission(self, submission: Submission) -> Submission:
        self.db.commit()
        self.db.refresh(submission)
        return submission
