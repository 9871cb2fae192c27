"""User accounts; every genetic, batch and plant is attributed to one."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Uuid, text
from sqlalchemy.orm import relationship

from growtrack.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)

    genetics = relationship("Genetic", back_populates="created_by")
    batches = relationship("Batch", back_populates="owner")
    plants = relationship("Plant", back_populates="created_by")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
