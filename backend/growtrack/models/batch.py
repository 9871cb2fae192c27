from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, text,
)
from sqlalchemy.orm import relationship

from growtrack.database import Base
from growtrack.models.enums import BatchStatus, enum_column


class Batch(Base):
    """A production run of plants sharing a strain and a timeline."""

    __tablename__ = "batches"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    strain = Column(String(255), nullable=False)
    genetic_id = Column(Integer, ForeignKey("genetic.id"), nullable=True)
    start_date = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    end_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(
        enum_column(BatchStatus, "batch_status"),
        nullable=False,
        default=BatchStatus.ACTIVE,
        server_default=BatchStatus.ACTIVE.value,
    )
    # Kept equal to the number of plants whose batch_id points here.
    plant_count = Column(Integer, nullable=False, default=0, server_default="0")
    notes = Column(Text, nullable=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="batches")
    genetic = relationship("Genetic", back_populates="batches")
    plants = relationship("Plant", back_populates="batch")

    __table_args__ = (
        Index("batch_name_idx", "name"),
        Index("batch_status_idx", "status"),
        Index("batch_user_id_idx", "user_id"),
        Index("batch_genetic_id_idx", "genetic_id"),
        CheckConstraint("plant_count >= 0", name="ck_batches_plant_count_non_negative"),
    )

    def __repr__(self):
        return f"<Batch(id={self.id}, name='{self.name}')>"
