"""
Translation of workflow errors into HTTP errors.

Routers wrap service calls in `translate_errors`; workflow errors keep their
message and get a status code by class, anything unexpected becomes a 500.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from domain.errors import (
    ClientMismatchError,
    ComplianceError,
    InvalidOperationError,
    InvalidTransitionError,
    NotFoundError,
    PreconditionError,
    WorkflowError,
)
from repositories.record_store import StorageIOError

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (NotFoundError, 404),
    (InvalidTransitionError, 409),
    (ClientMismatchError, 403),
    (ComplianceError, 422),
    (PreconditionError, 400),
    (InvalidOperationError, 400),
)


def status_code_for(error: WorkflowError) -> int:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 400


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """
    Convert exceptions raised inside the block into HTTPException.

    Args:
        action: short description used in 500 details, e.g. "update offer"
    """

    try:
        yield
    except HTTPException:
        raise
    except WorkflowError as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StorageIOError as e:
        logger.error("Storage failure while trying to %s: %s", action, e)
        raise HTTPException(status_code=500, detail=f"Failed to {action}: {e}") from e
    except Exception as e:
        logger.exception("Unexpected error while trying to %s", action)
        raise HTTPException(status_code=500, detail=f"Failed to {action}: {str(e)}") from e
