from sqlalchemy import Column, DateTime, Integer, String, Text, text
from sqlalchemy.orm import relationship

from growtrack.database import Base


class Location(Base):
    """A room, tent or bench plants are kept in."""

    __tablename__ = "location"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False)

    plants = relationship("Plant", back_populates="location")
