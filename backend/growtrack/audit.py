"""Audit logging utilities."""
from decimal import Decimal
import enum
from typing import Any, List, Optional
import uuid

from sqlalchemy.orm import Session, joinedload

from growtrack.models import AuditLog, User


def log_change(
    db: Session,
    user: Optional[User],
    entity_type: str,
    entity_id: int,
    action: str,
    before: Optional[dict] = None,
    after: Optional[dict] = None
) -> AuditLog:
    """Log a change to the audit log.

    Args:
        db: Database session
        user: Current user (None for system actions)
        entity_type: 'genetic', 'batch' or 'plant'
        entity_id: ID of the entity
        action: 'CREATE', 'UPDATE', or 'DELETE'
        before: State before change (None for CREATE)
        after: State after change (None for DELETE)
    """
    log = AuditLog(
        user_id=user.id if user else None,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        diff_json={"before": before, "after": after}
    )
    db.add(log)
    db.flush()
    return log


def entity_to_dict(entity: Any) -> dict:
    """Convert an SQLAlchemy entity to a JSON-safe dict for logging."""
    result = {}
    for column in entity.__table__.columns:
        value = getattr(entity, column.key)
        # Convert non-serializable types
        if hasattr(value, 'isoformat'):
            value = value.isoformat()
        elif isinstance(value, Decimal):
            value = str(value)
        elif isinstance(value, enum.Enum):
            value = value.value
        elif isinstance(value, uuid.UUID):
            value = str(value)
        result[column.key] = value
    return result


def entity_history(db: Session, entity_type: str, entity_id: int, limit: int = 50) -> List[AuditLog]:
    return db.query(AuditLog).options(
        joinedload(AuditLog.user)
    ).filter(
        AuditLog.entity_type == entity_type,
        AuditLog.entity_id == entity_id,
    ).order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
