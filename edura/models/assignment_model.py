# /edura/models/assignment_model.py

"""
Pydantic contracts for assignment content and the assignment API.

Assignment content is a tagged union over three variants, discriminated by
`assignmentType`. Quiz questions are themselves a tagged union discriminated
by `type`. The content models only describe the *shape* of the payload; the
authoring rules (non-empty statements, four options, answer letters) live in
`services/assignment_helpers/content_validation.py` so that every problem can
be reported at once.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator


# --- Core Enumerations ---
class AssignmentType(str, Enum):
    QUIZ = "quiz"
    WRITTEN = "written"
    FLASHCARD = "flashcard"


class QuestionType(str, Enum):
    SIMPLE = "simple"
    MULTIPLE = "multiple"
    TRUEFALSE = "truefalse"


OPTION_LETTERS = ("a", "b", "c", "d")
TRUE_FALSE_VALUES = ("true", "false")


# --- Quiz Content ---

class QuestionBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"q_{uuid.uuid4().hex[:8]}")
    index: int = Field(default=0, description="1-based position, re-numbered on save.")
    statement: str = ""
    correctAnswer: str = ""
    explanation: Optional[str] = None


class SimpleQuestion(QuestionBase):
    type: Literal["simple"] = "simple"


class MultipleChoiceQuestion(QuestionBase):
    type: Literal["multiple"] = "multiple"
    options: List[str] = Field(default_factory=list, description="Exactly four options, lettered a to d.")


class TrueFalseQuestion(QuestionBase):
    type: Literal["truefalse"] = "truefalse"


Question = Annotated[
    Union[SimpleQuestion, MultipleChoiceQuestion, TrueFalseQuestion],
    Field(discriminator="type"),
]


class QuizContent(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    assignmentType: Literal["quiz"] = "quiz"
    questions: List[Question] = Field(default_factory=list)


# --- Written Content ---

class FileAttachment(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    name: str = ""
    url: str = ""
    size: int = Field(default=0, ge=0, description="File size in bytes.")
    type: str = Field(default="", description="MIME type.")


class WrittenContent(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    assignmentType: Literal["written"] = "written"
    instructions: str = ""
    attachments: List[FileAttachment] = Field(default_factory=list)


# --- Flashcard Content ---

class Flashcard(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str = Field(default_factory=lambda: f"card_{uuid.uuid4().hex[:8]}")
    index: int = 0
    front: str = ""
    back: str = ""


class FlashcardContent(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    assignmentType: Literal["flashcard"] = "flashcard"
    cards: List[Flashcard] = Field(default_factory=list)


AssignmentContent = Annotated[
    Union[QuizContent, WrittenContent, FlashcardContent],
    Field(discriminator="assignmentType"),
]

content_adapter = TypeAdapter(AssignmentContent)


# --- Submission Content ---

class WrittenSubmissionContent(BaseModel):
    text: Optional[str] = None
    files: List[FileAttachment] = Field(default_factory=list)


class FlashcardSubmissionContent(BaseModel):
    completed: bool
    completedAt: Optional[str] = None


# --- Validation and Grading Results ---

class FieldError(BaseModel):
    """A single field-scoped authoring error, keyed for inline display."""
    field: str
    message: str


class QuestionResult(BaseModel):
    questionId: str
    correct: bool


class GradingResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    perQuestion: List[QuestionResult]


# --- API Contract Models ---

class ContentValidationRequest(BaseModel):
    assignmentType: AssignmentType
    assignmentContent: Union[Dict[str, Any], str]


class ContentValidationResponse(BaseModel):
    valid: bool
    assignmentContent: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = Field(default_factory=list)


class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    testingDuration: Optional[int] = Field(default=None, ge=1, description="Quiz time limit in minutes.")
    assignmentType: AssignmentType = AssignmentType.QUIZ
    assignmentContent: Union[Dict[str, Any], str]


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    testingDuration: Optional[int] = Field(default=None, ge=1)
    assignmentType: Optional[AssignmentType] = None
    assignmentContent: Optional[Union[Dict[str, Any], str]] = None

    @field_validator("title")
    @classmethod
    def title_cannot_be_cleared(cls, value):
        # Omit the field to keep the title; an explicit null is not a value.
        if value is None:
            raise ValueError("Title cannot be empty.")
        return value


class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    assignmentId: str = Field(validation_alias=AliasChoices("assignmentId", "assignment_id"))
    classId: str = Field(validation_alias=AliasChoices("classId", "class_id"))
    title: str
    description: Optional[str] = None
    assignmentType: AssignmentType = Field(validation_alias=AliasChoices("assignmentType", "assignment_type"))
    assignmentContent: Dict[str, Any] = Field(validation_alias=AliasChoices("assignmentContent", "assignment_content"))
    dueDate: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("dueDate", "due_date"))
    testingDuration: Optional[int] = Field(default=None, validation_alias=AliasChoices("testingDuration", "testing_duration"))
    createdAt: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))


class FlashcardImportRequest(BaseModel):
    text: str
    startIndex: int = Field(default=1, ge=1)
