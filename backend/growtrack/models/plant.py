from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint,
    Uuid, text,
)
from sqlalchemy.orm import relationship

from growtrack.database import Base
from growtrack.models.enums import (
    HealthStatus, PlantSex, PlantSource, PlantStage, enum_column,
)


class Plant(Base):
    """An individually tracked plant."""

    __tablename__ = "plant"

    id = Column(Integer, primary_key=True)
    code = Column(String(32), nullable=False)
    genetic_id = Column(Integer, ForeignKey("genetic.id"), nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=True)
    source = Column(enum_column(PlantSource, "plant_source"), nullable=False)
    stage = Column(enum_column(PlantStage, "plant_stage"), nullable=False)
    plant_date = Column(Date, nullable=True)
    harvest_date = Column(Date, nullable=True)
    mother_id = Column(Integer, ForeignKey("plant.id"), nullable=True)
    generation = Column(Integer, nullable=True)
    sex = Column(enum_column(PlantSex, "plant_sex"), nullable=True)
    phenotype = Column(String(255), nullable=True)
    health_status = Column(
        enum_column(HealthStatus, "health_status"),
        nullable=False,
        default=HealthStatus.HEALTHY,
        server_default=HealthStatus.HEALTHY.value,
    )
    quarantine = Column(Boolean, default=False, server_default=text("false"))
    destroy_reason = Column(String(255), nullable=True)
    location_id = Column(Integer, ForeignKey("location.id"), nullable=True)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    genetic = relationship("Genetic", back_populates="plants")
    batch = relationship("Batch", back_populates="plants")
    location = relationship("Location", back_populates="plants")
    created_by = relationship("User", back_populates="plants")
    mother = relationship("Plant", remote_side=[id], back_populates="offspring")
    offspring = relationship("Plant", back_populates="mother")

    __table_args__ = (
        UniqueConstraint("code", name="uq_plant_code"),
        Index("plant_batch_id_idx", "batch_id"),
        Index("plant_stage_idx", "stage"),
        Index("plant_created_by_idx", "created_by_id"),
        Index("plant_genetic_id_idx", "genetic_id"),
        Index("plant_location_id_idx", "location_id"),
        Index("plant_mother_id_idx", "mother_id"),
    )

    def __repr__(self):
        return f"<Plant(id={self.id}, code='{self.code}')>"
