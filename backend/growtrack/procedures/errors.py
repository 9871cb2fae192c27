"""Typed failures raised by the data access procedures."""
import enum
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session

logger = logging.getLogger("growtrack.procedures")


class ErrorCode(str, enum.Enum):
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    INTERNAL = "INTERNAL"


class ProcedureError(Exception):
    """A failure the caller can act on, tagged with an :class:`ErrorCode`.

    ``cause`` holds the original exception for INTERNAL failures so it can be
    logged; it is never sent back to API clients.
    """

    def __init__(self, code: ErrorCode, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    def __repr__(self):
        return f"ProcedureError(code={self.code.value}, message={self.message!r})"


def not_found(entity: str) -> ProcedureError:
    return ProcedureError(ErrorCode.NOT_FOUND, f"{entity} not found")


@contextmanager
def store_errors(db: Session, message: str):
    """Roll back on failure and wrap unexpected errors as INTERNAL.

    ProcedureErrors raised inside the block pass through unchanged.
    """
    try:
        yield
    except ProcedureError:
        db.rollback()
        raise
    except Exception as exc:
        db.rollback()
        logger.exception(message)
        raise ProcedureError(ErrorCode.INTERNAL, message, cause=exc) from exc
