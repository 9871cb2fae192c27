"""Genetic input validation and response shapes."""
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from growtrack.models.enums import BatchStatus, GeneticType, HealthStatus, PlantStage
from growtrack.schemas.common import ORMModel, optional_text, reject_nulls, required_text
from growtrack.schemas.user import UserSummary

Percentage = Annotated[float, Field(ge=0, le=100)]


class GrowthCharacteristics(BaseModel):
    height: Optional[float] = Field(default=None, ge=0)
    spread: Optional[float] = Field(default=None, ge=0)
    internode_spacing: Optional[float] = Field(default=None, ge=0)
    leaf_pattern: Optional[str] = None


class Lineage(BaseModel):
    mother: Optional[str] = None
    father: Optional[str] = None
    generation: Optional[int] = Field(default=None, ge=0)


class GeneticCreate(BaseModel):
    """Schema for creating a genetic."""
    name: str
    type: GeneticType
    breeder: Optional[str] = None
    description: Optional[str] = None
    flowering_time: Optional[int] = Field(default=None, ge=0)
    thc_potential: Optional[Percentage] = None
    cbd_potential: Optional[Percentage] = None
    terpene_profile: Optional[Dict[str, float]] = None
    growth_characteristics: Optional[GrowthCharacteristics] = None
    lineage: Optional[Lineage] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return required_text(value, "Name")

    @field_validator("breeder", "description")
    @classmethod
    def clean_text(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class GeneticUpdate(BaseModel):
    """Partial genetic update; only fields present in the payload are applied."""
    name: Optional[str] = None
    type: Optional[GeneticType] = None
    breeder: Optional[str] = None
    description: Optional[str] = None
    flowering_time: Optional[int] = Field(default=None, ge=0)
    thc_potential: Optional[Percentage] = None
    cbd_potential: Optional[Percentage] = None
    terpene_profile: Optional[Dict[str, float]] = None
    growth_characteristics: Optional[GrowthCharacteristics] = None
    lineage: Optional[Lineage] = None

    @model_validator(mode="before")
    @classmethod
    def reject_required_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("name", "type"))

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return required_text(value, "Name")

    @field_validator("breeder", "description")
    @classmethod
    def clean_text(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class GeneticOut(ORMModel):
    id: int
    name: str
    slug: str
    type: GeneticType
    breeder: Optional[str] = None
    description: Optional[str] = None
    flowering_time: Optional[int] = None
    thc_potential: Optional[float] = None
    cbd_potential: Optional[float] = None
    terpene_profile: Optional[Dict[str, Any]] = None
    growth_characteristics: Optional[Dict[str, Any]] = None
    lineage: Optional[Dict[str, Any]] = None
    created_by_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GeneticListItem(GeneticOut):
    created_by: Optional[UserSummary] = None


class GeneticPlantSummary(BaseModel):
    id: int
    code: str
    stage: PlantStage
    health_status: HealthStatus
    plant_date: Optional[date] = None


class GeneticBatchSummary(BaseModel):
    id: int
    name: str
    status: BatchStatus
    plant_count: int
    created_at: Optional[datetime] = None


class GeneticDetail(GeneticOut):
    """Genetic with related-row counts and summaries."""
    plant_count: int = 0
    batch_count: int = 0
    plants: List[GeneticPlantSummary] = []
    batches: List[GeneticBatchSummary] = []


class AuditEntryOut(BaseModel):
    id: int
    timestamp: Optional[datetime]
    user_email: Optional[str]
    entity_type: str
    action: str
    diff_json: Any
