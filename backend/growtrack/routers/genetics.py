"""Genetic API endpoints."""
from typing import List

from fastapi import APIRouter, Depends, Query

from growtrack.auth import get_context
from growtrack.procedures import ProcedureContext, genetic
from growtrack.schemas import (
    AuditEntryOut, GeneticCreate, GeneticDetail, GeneticListItem, GeneticOut,
    GeneticUpdate,
)

router = APIRouter(prefix="/genetics", tags=["genetics"])


@router.get("", response_model=List[GeneticListItem])
def list_genetics(ctx: ProcedureContext = Depends(get_context)):
    """List all genetics ordered by name."""
    return genetic.list_genetics(ctx)


@router.post("", response_model=GeneticOut, status_code=201)
def create_genetic(data: GeneticCreate, ctx: ProcedureContext = Depends(get_context)):
    return genetic.create(ctx, data)


@router.get("/{slug}", response_model=GeneticDetail)
def get_genetic(slug: str, ctx: ProcedureContext = Depends(get_context)):
    """Genetic with its plants and batches."""
    return genetic.get_by_slug(ctx, slug)


@router.patch("/{genetic_id}", response_model=GeneticOut)
def update_genetic(genetic_id: int, data: GeneticUpdate, ctx: ProcedureContext = Depends(get_context)):
    return genetic.update(ctx, genetic_id, data)


@router.delete("/{genetic_id}", status_code=204)
def delete_genetic(genetic_id: int, ctx: ProcedureContext = Depends(get_context)):
    genetic.delete(ctx, genetic_id)
    return None


@router.get("/{genetic_id}/history", response_model=List[AuditEntryOut])
def get_genetic_history(
    genetic_id: int,
    limit: int = Query(default=50, ge=1, le=200),
    ctx: ProcedureContext = Depends(get_context),
):
    """Audit history for a genetic."""
    logs = genetic.history(ctx, genetic_id, limit)
    return [
        {
            "id": log.id,
            "timestamp": log.timestamp,
            "user_email": log.user.email if log.user else None,
            "entity_type": log.entity_type,
            "action": log.action,
            "diff_json": log.diff_json,
        }
        for log in logs
    ]
