# /edura/services/database_helpers/user_class_repository_sql.py

"""
This module contains the SQLAlchemy queries for the User, Class and Enrollment
tables. It is the row-query capability that the tenant scope resolver runs on,
so every method here is a simple key or foreign-key filter without joins.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from edura.db.models.user_models import User
from edura.db.models.class_models import Class, Enrollment
from .store_errors import translate_store_errors


class UserClassRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    @translate_store_errors
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    @translate_store_errors
    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    @translate_store_errors
    def get_user_ids_by_manager(self, role: str, manager_id: str) -> List[str]:
        """Ids of every user with the given role created by the given manager."""
        rows = (
            self.db.query(User.id)
            .filter(User.role == role, User.manager_id == manager_id)
            .all()
        )
        return [row.id for row in rows]

    @translate_store_errors
    def user_exists(self, user_id: str, role: str, manager_id: str) -> bool:
        """
        Existence check that combines identity, role and manager ownership in a
        single predicate.
        """
        row = (
            self.db.query(User.id)
            .filter(User.id == user_id, User.role == role, User.manager_id == manager_id)
            .first()
        )
        return row is not None

    # --- Class Methods ---

    @translate_store_errors
    def get_class_by_id(self, class_id: str) -> Optional[Class]:
        return self.db.query(Class).filter(Class.class_id == class_id).first()

    @translate_store_errors
    def get_class_for_teacher(self, class_id: str, teacher_id: str) -> Optional[Class]:
        """Retrieves a class only if it is owned by the specified teacher."""
        return (
            self.db.query(Class)
            .filter(Class.class_id == class_id, Class.teacher_id == teacher_id)
            .first()
        )

    @translate_store_errors
    def get_class_teacher_id(self, class_id: str) -> Optional[str]:
        row = self.db.query(Class.teacher_id).filter(Class.class_id == class_id).first()
        return row.teacher_id if row else None

    @translate_store_errors
    def get_classes_by_teacher_ids(self, teacher_ids: Iterable[str]) -> List[Class]:
        """
        Classes taught by any of the given teachers. Callers must never pass an
        empty collection; an empty IN () predicate is not portable.
        """
        teacher_ids = list(teacher_ids)
        if not teacher_ids:
            raise ValueError("teacher_ids must not be empty")
        return self.db.query(Class).filter(Class.teacher_id.in_(teacher_ids)).all()

    @translate_store_errors
    def add_class(self, record: Dict) -> Class:
        new_class = Class(**record)
        self.db.add(new_class)
        self.db.commit()
        self.db.refresh(new_class)
        return new_class

    # --- Enrollment Methods ---

    @translate_store_errors
    def add_enrollment(self, record: Dict) -> Enrollment:
        enrollment = Enrollment(**record)
        self.db.add(enrollment)
        self.db.commit()
        self.db.refresh(enrollment)
        return enrollment

    @translate_store_errors
    def is_enrolled(self, student_id: str, class_id: str) -> bool:
        row = (
            self.db.query(Enrollment.enrollment_id)
            .filter(Enrollment.student_id == student_id, Enrollment.class_id == class_id)
            .first()
        )
        return row is not None

    @translate_store_errors
    def get_enrollments_by_class_ids(self, class_ids: Iterable[str]) -> List[Enrollment]:
        class_ids = list(class_ids)
        if not class_ids:
            return []
        return self.db.query(Enrollment).filter(Enrollment.class_id.in_(class_ids)).all()
