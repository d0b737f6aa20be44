# /edura/routers/student_router.py

from fastapi import APIRouter, Depends, status

from ..core import config
from ..core.deps import Identity, Role, require_role
from ..models import assignment_model, submission_model
from ..services import assignment_service, database_service, submission_service
from .responses import unwrap

router = APIRouter()

student_only = require_role(Role.STUDENT)


@router.get("/classes/{class_id}/assignments", response_model=submission_model.AssignmentStatusList, summary="Get Assignment Statuses for a Class")
def get_assignment_statuses(class_id: str, identity: Identity = Depends(student_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    statuses = unwrap(assignment_service.get_student_assignment_statuses(class_id=class_id, student_id=identity.user_id, db=db))
    return submission_model.AssignmentStatusList(assignments=statuses)


@router.get("/assignments/{assignment_id}", response_model=assignment_model.Assignment, summary="Get an Assignment to Work On")
def get_assignment(assignment_id: str, identity: Identity = Depends(student_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(assignment_service.get_assignment_for_student(assignment_id=assignment_id, student_id=identity.user_id, db=db))


@router.post("/assignments/{assignment_id}/submit", response_model=submission_model.Submission, status_code=status.HTTP_201_CREATED, summary="Submit an Assignment")
def submit_assignment(assignment_id: str, submission_create: submission_model.SubmissionCreate, identity: Identity = Depends(student_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(submission_service.submit_assignment(
        db=db,
        assignment_id=assignment_id,
        student_id=identity.user_id,
        raw_answer=submission_create.submissionContent,
        allow_late_submission=config.ALLOW_LATE_SUBMISSIONS,
    ))


@router.get("/assignments/{assignment_id}/submission", response_model=submission_model.Submission, summary="Get My Submission")
def get_my_submission(assignment_id: str, identity: Identity = Depends(student_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(submission_service.get_student_submission(db=db, assignment_id=assignment_id, student_id=identity.user_id))
