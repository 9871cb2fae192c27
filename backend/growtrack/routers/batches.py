"""Batch API endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from growtrack.auth import get_context
from growtrack.procedures import ProcedureContext, batch
from growtrack.schemas import BatchCreate, BatchDetail, BatchListItem, BatchOut, BatchUpdate

router = APIRouter(prefix="/batches", tags=["batches"])


@router.get("", response_model=List[BatchListItem])
def list_batches(ctx: ProcedureContext = Depends(get_context)):
    return batch.list_batches(ctx)


@router.post("", response_model=BatchOut, status_code=201)
def create_batch(data: BatchCreate, ctx: ProcedureContext = Depends(get_context)):
    return batch.create(ctx, data)


@router.get("/{batch_id}", response_model=BatchDetail)
def get_batch(batch_id: int, ctx: ProcedureContext = Depends(get_context)):
    return batch.get(ctx, batch_id)


@router.patch("/{batch_id}", response_model=BatchOut)
def update_batch(batch_id: int, data: BatchUpdate, ctx: ProcedureContext = Depends(get_context)):
    return batch.update(ctx, batch_id, data)


@router.delete("/{batch_id}", status_code=204)
def delete_batch(batch_id: int, ctx: ProcedureContext = Depends(get_context)):
    batch.delete(ctx, batch_id)
    return None
