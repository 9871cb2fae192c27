from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from growtrack.models.enums import BatchStatus
from growtrack.schemas.common import ORMModel, as_utc, optional_text, reject_nulls, required_text
from growtrack.schemas.plant import PlantOut
from growtrack.schemas.refs import GeneticRef


class BatchCreate(BaseModel):
    """Schema for creating a batch. ``strain`` defaults to the genetic's name."""
    name: str
    strain: Optional[str] = None
    genetic_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: BatchStatus = BatchStatus.ACTIVE
    plant_count: int = Field(default=0, ge=0)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return required_text(value, "Name")

    @field_validator("strain")
    @classmethod
    def validate_strain(cls, value: Optional[str]) -> Optional[str]:
        return required_text(value, "Strain")

    @field_validator("notes")
    @classmethod
    def clean_notes(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)

    @model_validator(mode="after")
    def check_batch(self):
        if self.strain is None and self.genetic_id is None:
            raise ValueError("Either strain or genetic_id is required")
        if self.start_date and self.end_date and as_utc(self.end_date) < as_utc(self.start_date):
            raise ValueError("end_date must be on or after start_date")
        return self


class BatchUpdate(BaseModel):
    """Partial batch update."""
    name: Optional[str] = None
    strain: Optional[str] = None
    genetic_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[BatchStatus] = None
    plant_count: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def reject_required_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("name", "strain", "status", "plant_count"))

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return required_text(value, "Name")

    @field_validator("strain")
    @classmethod
    def validate_strain(cls, value: Optional[str]) -> Optional[str]:
        return required_text(value, "Strain")

    @field_validator("notes")
    @classmethod
    def clean_notes(cls, value: Optional[str]) -> Optional[str]:
        return optional_text(value)


class BatchOut(ORMModel):
    id: int
    name: str
    strain: str
    genetic_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: BatchStatus
    plant_count: int
    notes: Optional[str] = None
    user_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BatchListItem(BatchOut):
    genetic: Optional[GeneticRef] = None


class BatchDetail(BatchListItem):
    plants: List[PlantOut] = []
