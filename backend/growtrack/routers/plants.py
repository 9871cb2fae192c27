"""Plant API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from growtrack.auth import get_context
from growtrack.procedures import ProcedureContext, plant
from growtrack.schemas import PlantCreate, PlantDetail, PlantListItem, PlantOut, PlantUpdate

router = APIRouter(prefix="/plants", tags=["plants"])


@router.get("", response_model=List[PlantListItem])
def list_plants(
    batch_id: Optional[int] = Query(default=None),
    genetic_id: Optional[int] = Query(default=None),
    ctx: ProcedureContext = Depends(get_context),
):
    return plant.list_plants(ctx, batch_id=batch_id, genetic_id=genetic_id)


@router.post("", response_model=PlantOut, status_code=201)
def create_plant(data: PlantCreate, ctx: ProcedureContext = Depends(get_context)):
    return plant.create(ctx, data)


@router.get("/{code}", response_model=PlantDetail)
def get_plant(code: str, ctx: ProcedureContext = Depends(get_context)):
    """Look a plant up by the code printed on its label."""
    return plant.get_by_code(ctx, code)


@router.patch("/{plant_id}", response_model=PlantOut)
def update_plant(plant_id: int, data: PlantUpdate, ctx: ProcedureContext = Depends(get_context)):
    return plant.update(ctx, plant_id, data)


@router.delete("/{plant_id}", status_code=204)
def delete_plant(plant_id: int, ctx: ProcedureContext = Depends(get_context)):
    plant.delete(ctx, plant_id)
    return None
