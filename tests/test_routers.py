# /tests/test_routers.py

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from edura.core.exceptions import StoreUnavailable
from edura.db.database import get_db
from edura.main import app
from edura.services.scope_service import ScopeResolver, get_scope_resolver

TEACHER = {"X-User-Id": "usr_tch_a1", "X-User-Role": "teacher"}
OTHER_TEACHER = {"X-User-Id": "usr_tch_b1", "X-User-Role": "teacher"}
STUDENT = {"X-User-Id": "usr_stu_a1", "X-User-Role": "student"}
MANAGER = {"X-User-Id": "usr_mgr_a", "X-User-Role": "manager"}


@pytest.fixture
def client(seeded_db, db_session):
    """
    A TestClient whose requests run against the seeded in-memory database.
    The lifespan is not entered, so the file database is never created.
    """
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def quiz_id(client, quiz_payload):
    response = client.post(
        "/api/assignments/classes/cls_a1",
        json={"title": "Quiz 1", "assignmentType": "quiz", "assignmentContent": quiz_payload},
        headers=TEACHER,
    )
    assert response.status_code == 201
    return response.json()["assignmentId"]


def test_health_check(client):
    assert client.get("/").status_code == 200


def test_identity_headers_are_required(client):
    assert client.get("/api/manager/scope").status_code == 401
    assert client.get("/api/manager/scope", headers={"X-User-Id": "usr_mgr_a", "X-User-Role": "admin"}).status_code == 401
    assert client.get("/api/manager/scope", headers=TEACHER).status_code == 403


def test_validate_endpoint_reports_field_errors(client):
    response = client.post(
        "/api/assignments/validate",
        json={"assignmentType": "flashcard", "assignmentContent": {"cards": [{"id": "c1", "front": "", "back": "x"}]}},
        headers=TEACHER,
    )
    body = response.json()
    assert response.status_code == 200
    assert body["valid"] is False
    assert body["errors"] == [{"field": "card-c1-front", "message": "The front of the card is required."}]


def test_create_with_invalid_content_is_422(client):
    response = client.post(
        "/api/assignments/classes/cls_a1",
        json={"title": "Empty", "assignmentType": "quiz", "assignmentContent": {"questions": []}},
        headers=TEACHER,
    )
    assert response.status_code == 422
    assert response.json()["detail"]["errors"][0]["field"] == "questions"


def test_created_assignment_is_hidden_from_other_tenants(client, quiz_id):
    own = client.get(f"/api/assignments/{quiz_id}", headers=TEACHER)
    foreign = client.get(f"/api/assignments/{quiz_id}", headers=OTHER_TEACHER)
    missing = client.get("/api/assignments/asg_missing", headers=TEACHER)

    assert own.status_code == 200
    assert own.json()["assignmentContent"]["questions"][0]["index"] == 1
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Not found or access denied"}


def test_student_submits_once(client, quiz_id):
    answers = {"q1": "Paris", "q2": "b", "q3": "true", "q4": "4"}
    first = client.post(f"/api/student/assignments/{quiz_id}/submit", json={"submissionContent": answers}, headers=STUDENT)
    second = client.post(f"/api/student/assignments/{quiz_id}/submit", json={"submissionContent": answers}, headers=STUDENT)

    assert first.status_code == 201
    assert first.json()["grade"] == 100
    assert second.status_code == 409
    assert second.json()["detail"]["reason"] == "duplicate"

    statuses = client.get("/api/student/classes/cls_a1/assignments", headers=STUDENT).json()["assignments"]
    assert statuses[0]["submitted"] is True


def test_missing_answers_are_422(client, quiz_id):
    response = client.post(
        f"/api/student/assignments/{quiz_id}/submit", json={"submissionContent": {"q1": "Paris"}}, headers=STUDENT,
    )
    assert response.status_code == 422
    assert response.json()["detail"]["missingCount"] == 3


def test_manual_grade_out_of_range(client, written_payload):
    created = client.post(
        "/api/assignments/classes/cls_a1",
        json={"title": "Essay", "assignmentType": "written", "assignmentContent": written_payload},
        headers=TEACHER,
    ).json()
    submitted = client.post(
        f"/api/student/assignments/{created['assignmentId']}/submit",
        json={"submissionContent": {"text": "Chlorophyll..."}},
        headers=STUDENT,
    ).json()

    url = f"/api/assignments/submissions/{submitted['submissionId']}/grade"
    rejected = client.post(url, json={"grade": 101}, headers=TEACHER)
    accepted = client.post(url, json={"grade": 88, "feedback": "Good"}, headers=TEACHER)

    assert rejected.status_code == 422
    assert rejected.json()["detail"]["field"] == "grade"
    assert accepted.status_code == 200
    assert accepted.json()["grade"] == 88
    assert accepted.json()["feedback"] == "Good"


def test_flashcard_import_preview(client):
    response = client.post(
        "/api/assignments/flashcards/import-preview",
        json={"text": "sun\tSonne\nmoon\tMond", "startIndex": 3},
        headers=TEACHER,
    )
    assert [(c["front"], c["index"]) for c in response.json()] == [("sun", 3), ("moon", 4)]


def test_manager_scope_and_report(client, quiz_id):
    scope = client.get("/api/manager/scope", headers=MANAGER).json()
    assert scope["classIds"] == ["cls_a1", "cls_a2"]

    assert client.get("/api/manager/classes/cls_b1/assignments", headers=MANAGER).status_code == 404
    assert len(client.get("/api/manager/classes/cls_a1/assignments", headers=MANAGER).json()) == 1

    report = client.get("/api/manager/reports/completion", headers=MANAGER).json()
    assert [c["className"] for c in report["byClass"]] == ["Algebra", "Biology"]


def test_store_outage_is_503(client):
    db = MagicMock()
    db.get_user_ids_by_manager.side_effect = StoreUnavailable()
    app.dependency_overrides[get_scope_resolver] = lambda: ScopeResolver(db)

    response = client.get("/api/manager/scope", headers=MANAGER)

    assert response.status_code == 503
    assert response.headers["Retry-After"] == "1"


def test_clearing_a_title_is_rejected(client, quiz_id):
    response = client.put(f"/api/assignments/{quiz_id}", json={"title": None}, headers=TEACHER)

    assert response.status_code == 422
    assert client.get(f"/api/assignments/{quiz_id}", headers=TEACHER).json()["title"] == "Quiz 1"


def test_plain_text_essay_submission(client, written_payload):
    created = client.post(
        "/api/assignments/classes/cls_a1",
        json={"title": "Essay", "assignmentType": "written", "assignmentContent": written_payload},
        headers=TEACHER,
    ).json()
    response = client.post(
        f"/api/student/assignments/{created['assignmentId']}/submit",
        json={"submissionContent": "Leaves are green because of chlorophyll."},
        headers=STUDENT,
    )

    assert response.status_code == 201
    assert response.json()["submissionContent"]["text"] == "Leaves are green because of chlorophyll."


def test_report_window_is_validated(client):
    assert client.get("/api/manager/reports/completion?months=13", headers=MANAGER).status_code == 422
    report = client.get("/api/manager/reports/completion?months=3", headers=MANAGER).json()
    assert report["months"] == 3
    assert {"onTimeRate", "lateRate"} <= set(report)
