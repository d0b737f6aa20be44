# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Importing the registry makes sure every table is known to Base.metadata.
from edura.db.base import Base
from edura.services.database_service import DatabaseService
from edura.services.scope_service import ScopeResolver

# A single in-memory SQLite database shared by every connection of a test.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# --- Seeded organization graph ---
# Three tenants: A has two teachers, two students and two classes; B has one of
# each; C has no staff at all.
USERS = [
    {"id": "usr_mgr_a", "name": "Manager A", "email": "a@center.test", "role": "manager"},
    {"id": "usr_mgr_b", "name": "Manager B", "email": "b@center.test", "role": "manager"},
    {"id": "usr_mgr_c", "name": "Manager C", "email": "c@center.test", "role": "manager"},
    {"id": "usr_tch_a1", "name": "Teacher A1", "email": "ta1@center.test", "role": "teacher", "manager_id": "usr_mgr_a"},
    {"id": "usr_tch_a2", "name": "Teacher A2", "email": "ta2@center.test", "role": "teacher", "manager_id": "usr_mgr_a"},
    {"id": "usr_tch_b1", "name": "Teacher B1", "email": "tb1@center.test", "role": "teacher", "manager_id": "usr_mgr_b"},
    {"id": "usr_stu_a1", "name": "Student A1", "email": "sa1@center.test", "role": "student", "manager_id": "usr_mgr_a"},
    {"id": "usr_stu_a2", "name": "Student A2", "email": "sa2@center.test", "role": "student", "manager_id": "usr_mgr_a"},
    {"id": "usr_stu_b1", "name": "Student B1", "email": "sb1@center.test", "role": "student", "manager_id": "usr_mgr_b"},
]

CLASSES = [
    {"class_id": "cls_a1", "class_name": "Algebra", "class_code": "ALG-1", "teacher_id": "usr_tch_a1"},
    {"class_id": "cls_a2", "class_name": "Biology", "class_code": "BIO-1", "teacher_id": "usr_tch_a2"},
    {"class_id": "cls_b1", "class_name": "Chemistry", "class_code": "CHE-1", "teacher_id": "usr_tch_b1"},
]

ENROLLMENTS = [
    {"enrollment_id": "enr_1", "student_id": "usr_stu_a1", "class_id": "cls_a1"},
    {"enrollment_id": "enr_2", "student_id": "usr_stu_a2", "class_id": "cls_a1"},
    {"enrollment_id": "enr_3", "student_id": "usr_stu_a1", "class_id": "cls_a2"},
    {"enrollment_id": "enr_4", "student_id": "usr_stu_b1", "class_id": "cls_b1"},
]


@pytest.fixture
def db_session():
    """
    Provides a SQLAlchemy session on a fresh in-memory database. The schema is
    created before the test and dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_service(db_session):
    """A DatabaseService over the empty test database."""
    return DatabaseService(db_session=db_session)


@pytest.fixture
def seeded_db(db_service):
    """A DatabaseService over a database holding the three-tenant graph above."""
    for user in USERS:
        db_service.add_user(user)
    for class_record in CLASSES:
        db_service.add_class(class_record)
    for enrollment in ENROLLMENTS:
        db_service.add_enrollment(enrollment)
    return db_service


@pytest.fixture
def resolver(seeded_db):
    return ScopeResolver(seeded_db)


@pytest.fixture
def quiz_payload():
    """Four questions, one of each type plus a second short answer."""
    return {
        "assignmentType": "quiz",
        "questions": [
            {"id": "q1", "type": "simple", "statement": "Capital of France?", "correctAnswer": "Paris"},
            {"id": "q2", "type": "multiple", "statement": "2 + 2 = ?", "options": ["3", "4", "5", "6"], "correctAnswer": "B"},
            {"id": "q3", "type": "truefalse", "statement": "Water is wet.", "correctAnswer": "TRUE"},
            {"id": "q4", "type": "simple", "statement": "Square root of 16?", "correctAnswer": "4"},
        ],
    }


@pytest.fixture
def written_payload():
    return {"assignmentType": "written", "instructions": "Write 300 words about photosynthesis.", "attachments": []}


@pytest.fixture
def flashcard_payload():
    return {
        "assignmentType": "flashcard",
        "cards": [
            {"id": "card_1", "front": "H2O", "back": "Water"},
            {"id": "card_2", "front": "NaCl", "back": "Salt"},
        ],
    }


@pytest.fixture
def make_assignment(seeded_db):
    """
    Factory that stores a validated assignment directly through the
    repository, bypassing the ownership checks of the service layer.
    """
    from edura.services.assignment_helpers.content_validation import validate_content

    counter = {"n": 0}

    def _make(class_id, payload, due_date=None, title="Homework"):
        counter["n"] += 1
        content = validate_content(payload["assignmentType"], payload).value
        return seeded_db.add_assignment({
            "assignment_id": f"asg_test_{counter['n']}",
            "class_id": class_id,
            "title": title,
            "assignment_type": payload["assignmentType"],
            "assignment_content": content.model_dump(mode="json"),
            "due_date": due_date,
        })

    return _make


@pytest.fixture
def org():
    """The raw records of the seeded graph, for tests that iterate over it."""
    return {"users": USERS, "classes": CLASSES, "enrollments": ENROLLMENTS}
