# /edura/models/submission_model.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SubmissionCreate(BaseModel):
    """
    A student's answer. For quizzes this is a map of question id to answer,
    for written work `{text, files}`, for flashcards `{completed, completedAt}`.
    A JSON-encoded string is accepted as well.
    """
    submissionContent: Union[Dict[str, Any], str]


class Submission(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    submissionId: str = Field(validation_alias=AliasChoices("submissionId", "submission_id"))
    assignmentId: str = Field(validation_alias=AliasChoices("assignmentId", "assignment_id"))
    studentId: str = Field(validation_alias=AliasChoices("studentId", "student_id"))
    submissionContent: Optional[Any] = Field(default=None, validation_alias=AliasChoices("submissionContent", "submission_content"))
    submittedAt: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("submittedAt", "submitted_at"))
    grade: Optional[int] = None
    feedback: Optional[str] = None
    gradedAt: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("gradedAt", "graded_at"))


class ManualGradeRequest(BaseModel):
    # Bounds are checked by the grading service so the error stays field-scoped.
    grade: Any
    feedback: Optional[str] = None


class AssignmentStatus(BaseModel):
    """One row of a student's view of a class: an assignment and whether it was submitted."""
    assignmentId: str
    title: str
    description: Optional[str] = None
    assignmentType: str
    dueDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    submitted: bool
    submittedAt: Optional[datetime] = None
    grade: Optional[int] = None


class AssignmentStatusList(BaseModel):
    assignments: List[AssignmentStatus]
