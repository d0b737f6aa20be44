# /edura/routers/assignments_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import Identity, Role, require_role
from ..models import assignment_model, submission_model
from ..services import assignment_service, database_service, submission_service
from ..services.assignment_helpers.content_validation import validate_content
from ..services.assignment_helpers.indexing import parse_flashcard_import
from .responses import unwrap

router = APIRouter()

teacher_only = require_role(Role.TEACHER)


# --- AUTHORING HELPERS ---

@router.post("/validate", response_model=assignment_model.ContentValidationResponse, summary="Validate Assignment Content")
def validate_assignment_content(request: assignment_model.ContentValidationRequest, identity: Identity = Depends(teacher_only)):
    result = validate_content(request.assignmentType, request.assignmentContent)
    if result.ok:
        return assignment_model.ContentValidationResponse(valid=True, assignmentContent=result.value.model_dump(mode="json"))
    return assignment_model.ContentValidationResponse(valid=False, errors=result.error)


@router.post("/flashcards/import-preview", response_model=List[assignment_model.Flashcard], summary="Preview a Bulk Flashcard Import")
def preview_flashcard_import(request: assignment_model.FlashcardImportRequest, identity: Identity = Depends(teacher_only)):
    return parse_flashcard_import(request.text, start_index=request.startIndex)


# --- CLASS COLLECTION ENDPOINTS (/api/assignments/classes/{class_id}) ---

@router.get("/classes/{class_id}", response_model=List[assignment_model.Assignment], summary="List a Class's Assignments")
def list_class_assignments(class_id: str, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(assignment_service.list_class_assignments(class_id=class_id, teacher_id=identity.user_id, db=db))


@router.post("/classes/{class_id}", response_model=assignment_model.Assignment, status_code=status.HTTP_201_CREATED, summary="Create an Assignment")
def create_assignment(class_id: str, assignment_create: assignment_model.AssignmentCreate, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(assignment_service.create_assignment(class_id=class_id, teacher_id=identity.user_id, data=assignment_create, db=db))


# --- SUBMISSION GRADING (/api/assignments/submissions/{submission_id}) ---

@router.post("/submissions/{submission_id}/grade", response_model=submission_model.Submission, summary="Grade a Written Submission")
def grade_submission(submission_id: str, grade_request: submission_model.ManualGradeRequest, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(submission_service.grade_written_submission(
        db=db,
        submission_id=submission_id,
        teacher_id=identity.user_id,
        grade=grade_request.grade,
        feedback=grade_request.feedback,
    ))


# --- INDIVIDUAL ASSIGNMENT ENDPOINTS (/api/assignments/{assignment_id}) ---

@router.get("/{assignment_id}", response_model=assignment_model.Assignment, summary="Get an Assignment")
def get_assignment(assignment_id: str, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(assignment_service.get_assignment_for_teacher(assignment_id=assignment_id, teacher_id=identity.user_id, db=db))


@router.put("/{assignment_id}", response_model=assignment_model.Assignment, summary="Update an Assignment")
def update_assignment(assignment_id: str, assignment_update: assignment_model.AssignmentUpdate, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        result = assignment_service.update_assignment(assignment_id=assignment_id, teacher_id=identity.user_id, update=assignment_update, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return unwrap(result)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Assignment")
def delete_assignment(assignment_id: str, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    unwrap(assignment_service.delete_assignment(assignment_id=assignment_id, teacher_id=identity.user_id, db=db))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{assignment_id}/submissions", response_model=List[submission_model.Submission], summary="List an Assignment's Submissions")
def list_submissions(assignment_id: str, identity: Identity = Depends(teacher_only), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return unwrap(assignment_service.list_assignment_submissions(assignment_id=assignment_id, teacher_id=identity.user_id, db=db))
