# /edura/db/models/user_models.py

"""
This module defines the SQLAlchemy ORM model for the `User` entity, the single
identity table for teachers, students and managers.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    """
    SQLAlchemy model representing a user of any role.

    Teachers and students carry the id of the manager that created them in
    `manager_id`. A manager row leaves it empty (or points at itself).
    """
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, index=True, nullable=False, default="student")
    manager_id = Column(String, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    classes = relationship("Class", back_populates="teacher", cascade="all, delete-orphan")
