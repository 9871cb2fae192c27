"""Compact shapes for related rows embedded in other responses."""
from typing import Optional

from growtrack.models.enums import BatchStatus, GeneticType
from growtrack.schemas.common import ORMModel


class GeneticRef(ORMModel):
    id: int
    name: str
    slug: str
    type: GeneticType


class BatchRef(ORMModel):
    id: int
    name: str
    status: BatchStatus


class PlantRef(ORMModel):
    id: int
    code: str


class LocationOut(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
