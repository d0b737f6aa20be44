# /edura/models/manager_model.py

from typing import List

from pydantic import BaseModel, Field


class ManagerScope(BaseModel):
    """The closed set of ids that belong to one manager's organization."""
    teacherIds: List[str]
    studentIds: List[str]
    classIds: List[str]


class ClassCompletion(BaseModel):
    classId: str
    className: str
    assignmentCount: int
    enrolledStudents: int
    expectedSubmissions: int
    submitted: int
    graded: int
    onTime: int
    late: int
    completionRate: float = Field(..., description="Submitted / expected, as a percentage.")
    gradedRate: float = Field(..., description="Graded / submitted, as a percentage.")
    onTimeRate: float = Field(..., description="On-time / submitted, as a percentage.")
    lateRate: float = Field(..., description="Late / submitted, as a percentage.")


class CompletionReport(BaseModel):
    months: int = Field(..., description="Assignments created in this many recent calendar months are counted.")
    overallCompletionRate: float
    overallGradedRate: float
    onTimeRate: float
    lateRate: float
    byClass: List[ClassCompletion]
