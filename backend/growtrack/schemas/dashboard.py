from pydantic import BaseModel

from growtrack.models.enums import GeneticType


class StrainShare(BaseModel):
    type: GeneticType
    count: int


class DashboardSummary(BaseModel):
    genetics: int
    active_batches: int
    plants: int
    quarantined_plants: int
