# /edura/db/models/assignment_models.py

"""
This module defines the SQLAlchemy ORM models for the `Assignment` and
`Submission` entities.
"""

from sqlalchemy import Column, String, Integer, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Assignment(Base):
    """
    SQLAlchemy model representing an assignment within a class.

    `assignment_content` holds the serialized content variant and
    `assignment_type` is its discriminant ("quiz", "written" or "flashcard").
    """
    __tablename__ = "assignments"

    assignment_id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.class_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    assignment_type = Column(String, nullable=False, default="quiz")
    assignment_content = Column(JSON, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    testing_duration = Column(Integer, nullable=True)  # minutes
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_ = relationship("Class", back_populates="assignments")
    # Deleting an assignment removes every submission made against it.
    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")


class Submission(Base):
    """
    SQLAlchemy model representing one student's submission for one assignment.

    The unique constraint on (assignment_id, student_id) is the only guard
    against double submission; the service layer relies on it.
    """
    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("assignment_id", "student_id", name="uq_submission_assignment_student"),)

    submission_id = Column(String, primary_key=True, index=True)
    assignment_id = Column(String, ForeignKey("assignments.assignment_id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    submission_content = Column(JSON, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    grade = Column(Integer, nullable=True)  # NULL until graded
    feedback = Column(String, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)

    assignment = relationship("Assignment", back_populates="submissions")
