from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from growtrack.models.enums import HealthStatus, PlantSex, PlantSource, PlantStage
from growtrack.schemas.common import ORMModel, optional_text, reject_nulls
from growtrack.schemas.refs import BatchRef, GeneticRef, LocationOut, PlantRef

CODE_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9-]{0,31}$"


class PlantCreate(BaseModel):
    """Schema for creating a plant. A code is generated when none is given."""
    code: Optional[str] = Field(default=None, pattern=CODE_PATTERN)
    genetic_id: Optional[int] = None
    batch_id: Optional[int] = None
    source: PlantSource
    stage: PlantStage
    plant_date: Optional[date] = None
    harvest_date: Optional[date] = None
    mother_id: Optional[int] = None
    generation: Optional[int] = Field(default=None, ge=0)
    sex: Optional[PlantSex] = None
    phenotype: Optional[str] = None
    health_status: HealthStatus = HealthStatus.HEALTHY
    quarantine: bool = False
    destroy_reason: Optional[str] = None
    location_id: Optional[int] = None

    @field_validator("phenotype", "destroy_reason")
    @classmethod
    def clean_text(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @model_validator(mode="after")
    def check_dates(self):
        if self.plant_date and self.harvest_date and self.harvest_date < self.plant_date:
            raise ValueError("harvest_date must be on or after plant_date")
        return self


class PlantUpdate(BaseModel):
    """Partial plant update."""
    code: Optional[str] = Field(default=None, pattern=CODE_PATTERN)
    genetic_id: Optional[int] = None
    batch_id: Optional[int] = None
    source: Optional[PlantSource] = None
    stage: Optional[PlantStage] = None
    plant_date: Optional[date] = None
    harvest_date: Optional[date] = None
    mother_id: Optional[int] = None
    generation: Optional[int] = Field(default=None, ge=0)
    sex: Optional[PlantSex] = None
    phenotype: Optional[str] = None
    health_status: Optional[HealthStatus] = None
    quarantine: Optional[bool] = None
    destroy_reason: Optional[str] = None
    location_id: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def reject_required_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("code", "source", "stage", "health_status", "quarantine"))

    @field_validator("phenotype", "destroy_reason")
    @classmethod
    def clean_text(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class PlantOut(ORMModel):
    id: int
    code: str
    genetic_id: Optional[int] = None
    batch_id: Optional[int] = None
    source: PlantSource
    stage: PlantStage
    plant_date: Optional[date] = None
    harvest_date: Optional[date] = None
    mother_id: Optional[int] = None
    generation: Optional[int] = None
    sex: Optional[PlantSex] = None
    phenotype: Optional[str] = None
    health_status: HealthStatus
    quarantine: bool = False
    destroy_reason: Optional[str] = None
    location_id: Optional[int] = None
    created_by_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PlantListItem(PlantOut):
    genetic: Optional[GeneticRef] = None
    batch: Optional[BatchRef] = None


class PlantDetail(PlantListItem):
    location: Optional[LocationOut] = None
    mother: Optional[PlantRef] = None
