from sqlalchemy import (
    JSON, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text,
    UniqueConstraint, Uuid, text,
)
from sqlalchemy.orm import relationship

from growtrack.database import Base
from growtrack.models.enums import GeneticType, enum_column


class Genetic(Base):
    """A strain definition plants and batches are grown from."""

    __tablename__ = "genetic"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    type = Column(enum_column(GeneticType, "genetic_type"), nullable=False)
    breeder = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    flowering_time = Column(Integer, nullable=True)  # days
    thc_potential = Column(Numeric, nullable=True)
    cbd_potential = Column(Numeric, nullable=True)
    terpene_profile = Column(JSON, nullable=True)  # {"myrcene": 0.8, ...}
    growth_characteristics = Column(JSON, nullable=True)
    lineage = Column(JSON, nullable=True)  # {"mother", "father", "generation"}
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    created_by = relationship("User", back_populates="genetics")
    plants = relationship("Plant", back_populates="genetic")
    batches = relationship("Batch", back_populates="genetic")

    __table_args__ = (
        UniqueConstraint("slug", name="uq_genetic_slug"),
        Index("genetic_name_idx", "name"),
        Index("genetic_type_idx", "type"),
        Index("genetic_created_by_idx", "created_by_id"),
        CheckConstraint(
            "thc_potential IS NULL OR (thc_potential >= 0 AND thc_potential <= 100)",
            name="ck_genetic_thc_range",
        ),
        CheckConstraint(
            "cbd_potential IS NULL OR (cbd_potential >= 0 AND cbd_potential <= 100)",
            name="ck_genetic_cbd_range",
        ),
    )

    def __repr__(self):
        return f"<Genetic(id={self.id}, slug='{self.slug}')>"
