# /edura/services/database_helpers/store_errors.py

import functools
import logging

from sqlalchemy.exc import InterfaceError, OperationalError

from ...core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def translate_store_errors(func):
    """
    Wraps a repository method so that a lost or refused database connection
    surfaces as `StoreUnavailable`, the single retryable error of the core.
    Every other SQLAlchemy error propagates untouched.
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.warning("Store unavailable during %s: %s", func.__name__, e.__class__.__name__)
            self.db.rollback()
            raise StoreUnavailable() from e
    return wrapper
