from typing import List

from fastapi import APIRouter, Depends

from growtrack.auth import get_context
from growtrack.procedures import ProcedureContext, dashboard
from growtrack.schemas import DashboardSummary, StrainShare

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/strain-distribution", response_model=List[StrainShare])
def strain_distribution(ctx: ProcedureContext = Depends(get_context)):
    return dashboard.strain_distribution(ctx)


@router.get("/summary", response_model=DashboardSummary)
def summary(ctx: ProcedureContext = Depends(get_context)):
    return dashboard.summary(ctx)
