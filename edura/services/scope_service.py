# /edura/services/scope_service.py

"""
Tenant scope resolution for manager-facing operations.

A manager owns the teachers and students whose `manager_id` points at them, and
through those teachers every class they teach. This module computes those sets
and provides the verify checks that must pass before a manager reads or writes
anything outside their own user row.

The resolver is stateless apart from a per-instance memo of teacher ids. It is
built per request by `get_scope_resolver` and must never be shared across
requests.
"""

import logging
from typing import Dict, FrozenSet, Set

from fastapi import Depends

from ..core.exceptions import AuthorizationError
from ..core.results import Result
from .database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

TEACHER_ROLE = "teacher"
STUDENT_ROLE = "student"


class ScopeResolver:
    def __init__(self, db: DatabaseService):
        self.db = db
        self._teacher_ids: Dict[str, FrozenSet[str]] = {}

    # --- Derived Sets ---

    def resolve_teacher_ids(self, manager_id: str) -> Set[str]:
        if manager_id not in self._teacher_ids:
            ids = self.db.get_user_ids_by_manager(role=TEACHER_ROLE, manager_id=manager_id)
            self._teacher_ids[manager_id] = frozenset(ids)
        return set(self._teacher_ids[manager_id])

    def resolve_student_ids(self, manager_id: str) -> Set[str]:
        return set(self.db.get_user_ids_by_manager(role=STUDENT_ROLE, manager_id=manager_id))

    def resolve_class_ids(self, manager_id: str) -> Set[str]:
        teacher_ids = self.resolve_teacher_ids(manager_id)
        if not teacher_ids:
            # No staff yet: never issue the class lookup with an empty IN ().
            return set()
        return {c.class_id for c in self.db.get_classes_by_teacher_ids(sorted(teacher_ids))}

    # --- Verify Checks ---

    def verify_teacher_belongs_to_manager(self, teacher_id: str, manager_id: str) -> bool:
        return self.db.user_exists(user_id=teacher_id, role=TEACHER_ROLE, manager_id=manager_id)

    def verify_student_belongs_to_manager(self, student_id: str, manager_id: str) -> bool:
        return self.db.user_exists(user_id=student_id, role=STUDENT_ROLE, manager_id=manager_id)

    def verify_class_belongs_to_manager(self, class_id: str, manager_id: str) -> bool:
        teacher_id = self.db.get_class_teacher_id(class_id)
        if teacher_id is None:
            return False
        return self.verify_teacher_belongs_to_manager(teacher_id, manager_id)

    # --- Guards ---
    # A resource owned by another manager and a missing resource produce the
    # same AuthorizationError.

    def authorize_teacher(self, teacher_id: str, manager_id: str) -> Result[str, AuthorizationError]:
        return self._guard(self.verify_teacher_belongs_to_manager(teacher_id, manager_id), "teacher", teacher_id, manager_id)

    def authorize_student(self, student_id: str, manager_id: str) -> Result[str, AuthorizationError]:
        return self._guard(self.verify_student_belongs_to_manager(student_id, manager_id), "student", student_id, manager_id)

    def authorize_class(self, class_id: str, manager_id: str) -> Result[str, AuthorizationError]:
        return self._guard(self.verify_class_belongs_to_manager(class_id, manager_id), "class", class_id, manager_id)

    def _guard(self, allowed: bool, kind: str, resource_id: str, manager_id: str) -> Result[str, AuthorizationError]:
        if allowed:
            return Result.success(resource_id)
        logger.warning("Denied %s access: resource=...%s manager=...%s", kind, resource_id[-6:], manager_id[-6:])
        return Result.failure(AuthorizationError())


def get_scope_resolver(db: DatabaseService = Depends(get_db_service)) -> ScopeResolver:
    """FastAPI dependency providing a fresh, request-scoped ScopeResolver."""
    return ScopeResolver(db)
