"""Pydantic schemas for procedure input validation and API responses."""
from growtrack.schemas.refs import BatchRef, GeneticRef, LocationOut, PlantRef
from growtrack.schemas.user import LoginRequest, TokenResponse, UserOut, UserSummary
from growtrack.schemas.genetic import (
    AuditEntryOut, GeneticCreate, GeneticDetail, GeneticListItem, GeneticOut,
    GeneticUpdate, GrowthCharacteristics, Lineage,
)
from growtrack.schemas.plant import PlantCreate, PlantDetail, PlantListItem, PlantOut, PlantUpdate
from growtrack.schemas.batch import BatchCreate, BatchDetail, BatchListItem, BatchOut, BatchUpdate
from growtrack.schemas.dashboard import DashboardSummary, StrainShare

__all__ = [
    "BatchRef", "GeneticRef", "LocationOut", "PlantRef",
    "LoginRequest", "TokenResponse", "UserOut", "UserSummary",
    "AuditEntryOut", "GeneticCreate", "GeneticDetail", "GeneticListItem", "GeneticOut",
    "GeneticUpdate", "GrowthCharacteristics", "Lineage",
    "PlantCreate", "PlantDetail", "PlantListItem", "PlantOut", "PlantUpdate",
    "BatchCreate", "BatchDetail", "BatchListItem", "BatchOut", "BatchUpdate",
    "DashboardSummary", "StrainShare",
]
