"""Closed value sets shared by the cultivation models and schemas."""
import enum

from sqlalchemy import Enum


class GeneticType(str, enum.Enum):
    SATIVA = "sativa"
    INDICA = "indica"
    HYBRID = "hybrid"


class BatchStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class PlantSource(str, enum.Enum):
    SEED = "seed"
    CLONE = "clone"
    MOTHER = "mother"
    TISSUE_CULTURE = "tissue_culture"


class PlantStage(str, enum.Enum):
    SEEDLING = "seedling"
    VEGETATIVE = "vegetative"
    FLOWERING = "flowering"
    HARVESTED = "harvested"
    MOTHER = "mother"
    DESTROYED = "destroyed"


class PlantSex(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    HERMAPHRODITE = "hermaphrodite"


class HealthStatus(str, enum.Enum):
    HEALTHY = "healthy"
    SICK = "sick"
    PESTS = "pests"
    NUTRIENT_DEFICIENCY = "nutrient_deficiency"
    DEAD = "dead"


def enum_column(enum_cls, name: str) -> Enum:
    """Store enum values (not member names) under a named database type."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda cls: [e.value for e in cls],
        validate_strings=True,
    )
