# /edura/db/base_class.py

from sqlalchemy.orm import declarative_base

# Every ORM model in the project inherits from this Base.
Base = declarative_base()
