# /edura/services/database_service.py

from typing import Dict, Generator, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from edura.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_class_repository_sql import UserClassRepositorySQL
from .database_helpers.assignment_repository_sql import AssignmentRepositorySQL


class DatabaseService:
    """
    Facade over the SQL repositories. Services depend on this class only, which
    keeps them testable against a MagicMock.
    """

    def __init__(self, db_session: Session):
        if db_session is None:
            raise ValueError("A database session is required.")
        self.user_class_repo = UserClassRepositorySQL(db_session)
        self.assignment_repo = AssignmentRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_class_repo.get_user_by_id(user_id)
    def add_user(self, record: Dict): return self.user_class_repo.add_user(record)
    def get_user_ids_by_manager(self, role: str, manager_id: str) -> List[str]: return self.user_class_repo.get_user_ids_by_manager(role, manager_id)
    def user_exists(self, user_id: str, role: str, manager_id: str) -> bool: return self.user_class_repo.user_exists(user_id, role, manager_id)

    # --- CLASS & ENROLLMENT METHODS (DELEGATED) ---
    def get_class_by_id(self, class_id: str): return self.user_class_repo.get_class_by_id(class_id)
    def get_class_for_teacher(self, class_id: str, teacher_id: str): return self.user_class_repo.get_class_for_teacher(class_id, teacher_id)
    def get_class_teacher_id(self, class_id: str) -> Optional[str]: return self.user_class_repo.get_class_teacher_id(class_id)
    def get_classes_by_teacher_ids(self, teacher_ids: Iterable[str]): return self.user_class_repo.get_classes_by_teacher_ids(teacher_ids)
    def add_class(self, record: Dict): return self.user_class_repo.add_class(record)
    def add_enrollment(self, record: Dict): return self.user_class_repo.add_enrollment(record)
    def is_enrolled(self, student_id: str, class_id: str) -> bool: return self.user_class_repo.is_enrolled(student_id, class_id)
    def get_enrollments_by_class_ids(self, class_ids: Iterable[str]): return self.user_class_repo.get_enrollments_by_class_ids(class_ids)

    # --- ASSIGNMENT METHODS (DELEGATED) ---
    def add_assignment(self, record: Dict): return self.assignment_repo.add_assignment(record)
    def get_assignment(self, assignment_id: str): return self.assignment_repo.get_assignment(assignment_id)
    def get_assignments_by_class_id(self, class_id: str): return self.assignment_repo.get_assignments_by_class_id(class_id)
    def get_assignments_by_class_ids(self, class_ids: Iterable[str]): return self.assignment_repo.get_assignments_by_class_ids(class_ids)
    def update_assignment(self, assignment, data: Dict): return self.assignment_repo.update_assignment(assignment, data)
    def delete_assignment(self, assignment) -> bool: return self.assignment_repo.delete_assignment(assignment)

    # --- SUBMISSION METHODS (DELEGATED) ---
    def add_submission(self, record: Dict): return self.assignment_repo.add_submission(record)
    def get_submission(self, submission_id: str): return self.assignment_repo.get_submission(submission_id)
    def get_submission_for_student(self, assignment_id: str, student_id: str): return self.assignment_repo.get_submission_for_student(assignment_id, student_id)
    def get_submissions_by_assignment_id(self, assignment_id: str): return self.assignment_repo.get_submissions_by_assignment_id(assignment_id)
    def get_submissions_by_assignment_ids(self, assignment_ids: Iterable[str]): return self.assignment_repo.get_submissions_by_assignment_ids(assignment_ids)
    def save_submission(self, submission): return self.assignment_repo.save_submission(submission)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a request-scoped DatabaseService."""
    yield DatabaseService(db_session=db)
