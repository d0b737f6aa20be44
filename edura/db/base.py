# /edura/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# Base.metadata knows every table before `create_all` runs.

from .base_class import Base

from .models.user_models import User
from .models.class_models import Class, Enrollment
from .models.assignment_models import Assignment, Submission
