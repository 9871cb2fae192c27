"""Batch data access procedures."""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from growtrack.audit import entity_to_dict, log_change
from growtrack.models import Batch, Genetic, Plant
from growtrack.procedures.context import ProcedureContext
from growtrack.procedures.errors import ErrorCode, ProcedureError, not_found, store_errors
from growtrack.schemas import BatchCreate, BatchUpdate
from growtrack.schemas.common import as_utc

logger = logging.getLogger("growtrack.procedures.batch")


def member_count(db: Session, batch_id: int) -> int:
    return db.query(func.count(Plant.id)).filter(Plant.batch_id == batch_id).scalar() or 0


def sync_plant_count(db: Session, batch_id: Optional[int]) -> None:
    """Set ``plant_count`` to the batch's current membership.

    Runs inside the caller's transaction, after pending plant changes are
    flushed, so the count commits together with them.
    """
    if batch_id is None:
        return
    db.flush()
    batch = db.get(Batch, batch_id)
    if batch is not None:
        batch.plant_count = member_count(db, batch_id)


def _require_genetic(db: Session, genetic_id: int) -> Genetic:
    genetic = db.get(Genetic, genetic_id)
    if genetic is None:
        raise not_found("Genetic")
    return genetic


def list_batches(ctx: ProcedureContext) -> List[Batch]:
    return (
        ctx.db.query(Batch)
        .options(joinedload(Batch.genetic))
        .order_by(Batch.created_at.desc(), Batch.id.desc())
        .all()
    )


def get(ctx: ProcedureContext, batch_id: int) -> Batch:
    batch = (
        ctx.db.query(Batch)
        .options(joinedload(Batch.genetic), selectinload(Batch.plants))
        .filter(Batch.id == batch_id)
        .first()
    )
    if batch is None:
        raise not_found("Batch")
    return batch


def create(ctx: ProcedureContext, data: BatchCreate) -> Batch:
    values = data.model_dump()
    if values["start_date"] is None:
        del values["start_date"]

    with store_errors(ctx.db, "Failed to create batch"):
        if data.genetic_id is not None:
            genetic = _require_genetic(ctx.db, data.genetic_id)
            values["strain"] = data.strain or genetic.name

        batch = Batch(**values, user_id=ctx.user.id)
        ctx.db.add(batch)
        ctx.db.flush()
        log_change(ctx.db, ctx.user, "batch", batch.id, "CREATE", None, entity_to_dict(batch))
        ctx.db.commit()
        ctx.db.refresh(batch)
    return batch


def update(ctx: ProcedureContext, batch_id: int, data: BatchUpdate) -> Batch:
    changes = data.model_dump(exclude_unset=True)

    with store_errors(ctx.db, "Failed to update batch"):
        batch = ctx.db.get(Batch, batch_id)
        if batch is None:
            raise not_found("Batch")

        if changes.get("genetic_id") is not None:
            _require_genetic(ctx.db, changes["genetic_id"])

        if "plant_count" in changes:
            members = member_count(ctx.db, batch_id)
            if members > 0 and changes["plant_count"] != members:
                raise ProcedureError(
                    ErrorCode.BAD_REQUEST,
                    "plant_count is derived from the plants assigned to the batch",
                )

        start = as_utc(changes.get("start_date", batch.start_date))
        end = as_utc(changes.get("end_date", batch.end_date))
        if start and end and end < start:
            raise ProcedureError(ErrorCode.BAD_REQUEST, "end_date must be on or after start_date")

        before = entity_to_dict(batch)
        for field, value in changes.items():
            setattr(batch, field, value)
        batch.updated_at = datetime.now(timezone.utc)
        ctx.db.flush()
        log_change(ctx.db, ctx.user, "batch", batch.id, "UPDATE", before, entity_to_dict(batch))
        ctx.db.commit()
        ctx.db.refresh(batch)
    return batch


def delete(ctx: ProcedureContext, batch_id: int) -> None:
    with store_errors(ctx.db, "Failed to delete batch"):
        batch = ctx.db.get(Batch, batch_id)
        if batch is None:
            raise not_found("Batch")
        if member_count(ctx.db, batch_id) > 0:
            raise ProcedureError(
                ErrorCode.PRECONDITION_FAILED,
                "Cannot delete batch that still has plants",
            )

        before = entity_to_dict(batch)
        ctx.db.delete(batch)
        log_change(ctx.db, ctx.user, "batch", batch_id, "DELETE", before, None)
        ctx.db.commit()

    logger.info("Deleted batch %s", batch_id)
