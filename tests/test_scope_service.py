# /tests/test_scope_service.py

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from edura.core.exceptions import AuthorizationError, StoreUnavailable
from edura.services.database_helpers.user_class_repository_sql import UserClassRepositorySQL
from edura.services.scope_service import ScopeResolver


MANAGERS = ["usr_mgr_a", "usr_mgr_b", "usr_mgr_c"]


def test_resolves_only_the_managers_own_people_and_classes(resolver):
    assert resolver.resolve_teacher_ids("usr_mgr_a") == {"usr_tch_a1", "usr_tch_a2"}
    assert resolver.resolve_student_ids("usr_mgr_a") == {"usr_stu_a1", "usr_stu_a2"}
    assert resolver.resolve_class_ids("usr_mgr_a") == {"cls_a1", "cls_a2"}

    assert resolver.resolve_teacher_ids("usr_mgr_b") == {"usr_tch_b1"}
    assert resolver.resolve_class_ids("usr_mgr_b") == {"cls_b1"}


def test_manager_without_staff_has_empty_scope(resolver):
    assert resolver.resolve_teacher_ids("usr_mgr_c") == set()
    assert resolver.resolve_student_ids("usr_mgr_c") == set()
    assert resolver.resolve_class_ids("usr_mgr_c") == set()


@pytest.mark.parametrize("manager_id", MANAGERS)
def test_verify_checks_agree_with_resolved_sets(resolver, org, manager_id):
    """
    GIVEN the seeded three-tenant graph
    WHEN every user and class is checked against every manager
    THEN a verify check passes exactly when the id is in the resolved set.
    """
    teachers = resolver.resolve_teacher_ids(manager_id)
    students = resolver.resolve_student_ids(manager_id)
    classes = resolver.resolve_class_ids(manager_id)

    for user in org["users"]:
        assert resolver.verify_teacher_belongs_to_manager(user["id"], manager_id) == (user["id"] in teachers)
        assert resolver.verify_student_belongs_to_manager(user["id"], manager_id) == (user["id"] in students)
    for class_record in org["classes"]:
        assert resolver.verify_class_belongs_to_manager(class_record["class_id"], manager_id) == (class_record["class_id"] in classes)


def test_role_is_part_of_the_check(resolver):
    # A student of manager A is not one of manager A's teachers.
    assert resolver.verify_teacher_belongs_to_manager("usr_stu_a1", "usr_mgr_a") is False
    assert resolver.verify_student_belongs_to_manager("usr_tch_a1", "usr_mgr_a") is False


def test_foreign_and_missing_resources_are_indistinguishable(resolver):
    foreign = resolver.authorize_class("cls_b1", "usr_mgr_a")
    missing = resolver.authorize_class("cls_does_not_exist", "usr_mgr_a")

    assert not foreign.ok and not missing.ok
    assert isinstance(foreign.error, AuthorizationError)
    assert type(foreign.error) is type(missing.error)
    assert foreign.error.message == missing.error.message == "Not found or access denied"


def test_authorize_returns_the_id_on_success(resolver):
    assert resolver.authorize_teacher("usr_tch_a2", "usr_mgr_a").value == "usr_tch_a2"
    assert resolver.authorize_student("usr_stu_a1", "usr_mgr_a").value == "usr_stu_a1"
    assert resolver.authorize_class("cls_a1", "usr_mgr_a").value == "cls_a1"


def test_empty_teacher_set_never_queries_classes():
    db = MagicMock()
    db.get_user_ids_by_manager.return_value = []

    assert ScopeResolver(db).resolve_class_ids("usr_mgr_c") == set()
    db.get_classes_by_teacher_ids.assert_not_called()


def test_teacher_ids_are_memoized_per_resolver():
    db = MagicMock()
    db.get_user_ids_by_manager.return_value = ["usr_tch_1"]
    db.get_classes_by_teacher_ids.return_value = []
    resolver = ScopeResolver(db)

    resolver.resolve_teacher_ids("usr_mgr_x")
    resolver.resolve_class_ids("usr_mgr_x")

    db.get_user_ids_by_manager.assert_called_once_with(role="teacher", manager_id="usr_mgr_x")


def test_repository_refuses_empty_teacher_list(db_session):
    repo = UserClassRepositorySQL(db_session)
    with pytest.raises(ValueError):
        repo.get_classes_by_teacher_ids([])


def test_lost_connection_surfaces_as_store_unavailable():
    session = MagicMock()
    session.query.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    repo = UserClassRepositorySQL(session)

    with pytest.raises(StoreUnavailable):
        repo.get_user_ids_by_manager(role="teacher", manager_id="usr_mgr_a")
    session.rollback.assert_called_once()
