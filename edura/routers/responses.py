# /edura/routers/responses.py

from fastapi import HTTPException, status

from ..core.exceptions import AuthorizationError, GradingError, SubmissionError, SubmissionErrorReason
from ..core.results import Result


def unwrap(result: Result):
    """
    Returns the value of a successful Result, or converts its error into the
    matching HTTPException. Unknown error values are re-raised as-is.
    """
    error = result.error
    if error is None:
        return result.value

    if isinstance(error, list):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": [e.model_dump() for e in error]},
        )
    if isinstance(error, AuthorizationError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, SubmissionError):
        code = status.HTTP_409_CONFLICT if error.reason == SubmissionErrorReason.DUPLICATE else status.HTTP_422_UNPROCESSABLE_ENTITY
        raise HTTPException(
            status_code=code,
            detail={"reason": error.reason.value, "message": error.message, "missingCount": error.missing_count},
        )
    if isinstance(error, GradingError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"field": error.field, "message": error.message},
        )
    raise error
