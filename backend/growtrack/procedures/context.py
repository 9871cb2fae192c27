from dataclasses import dataclass

from sqlalchemy.orm import Session

from growtrack.models import User


@dataclass(frozen=True)
class ProcedureContext:
    """Caller identity and store handle for one request."""

    db: Session
    user: User
