"""Audit log model for tracking changes."""
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from growtrack.database import Base


class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    entity_type = Column(String(20), nullable=False)  # 'genetic', 'batch' or 'plant'
    entity_id = Column(Integer, nullable=False)
    action = Column(String(10), nullable=False)  # 'CREATE', 'UPDATE', 'DELETE'
    diff_json = Column(JSON, nullable=False)  # {before: {...}, after: {...}}

    user = relationship("User")

    __table_args__ = (
        Index("ix_audit_log_entity", "entity_type", "entity_id"),
    )
