"""All SQLAlchemy models – re-exported for Alembic and app use."""

from growtrack.models.enums import (
    BatchStatus, GeneticType, HealthStatus, PlantSex, PlantSource, PlantStage,
)
from growtrack.models.user import User
from growtrack.models.location import Location
from growtrack.models.genetic import Genetic
from growtrack.models.batch import Batch
from growtrack.models.plant import Plant
from growtrack.models.audit_log import AuditLog

__all__ = [
    "BatchStatus", "GeneticType", "HealthStatus", "PlantSex", "PlantSource", "PlantStage",
    "User", "Location", "Genetic", "Batch", "Plant", "AuditLog",
]
