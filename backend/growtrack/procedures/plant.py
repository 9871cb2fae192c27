"""Plant data access procedures.

Plant mutations that change batch membership resynchronise the affected
batches' ``plant_count`` in the same transaction.
"""
import logging
import secrets
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from growtrack.audit import entity_to_dict, log_change
from growtrack.models import Batch, Genetic, Location, Plant
from growtrack.procedures.batch import sync_plant_count
from growtrack.procedures.context import ProcedureContext
from growtrack.procedures.errors import ErrorCode, ProcedureError, not_found, store_errors
from growtrack.schemas import PlantCreate, PlantUpdate

logger = logging.getLogger("growtrack.procedures.plant")

CODE_ATTEMPTS = 10
CODE_CONSTRAINT = "uq_plant_code"

_REFERENCES = (
    ("genetic_id", Genetic, "Genetic"),
    ("batch_id", Batch, "Batch"),
    ("location_id", Location, "Location"),
    ("mother_id", Plant, "Mother plant"),
)


def generate_code() -> str:
    return f"PL-{secrets.token_hex(3).upper()}"


def _code_taken(db: Session, code: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Plant.id).filter(Plant.code == code)
    if exclude_id is not None:
        query = query.filter(Plant.id != exclude_id)
    return query.first() is not None


def _free_code(db: Session) -> str:
    for _ in range(CODE_ATTEMPTS):
        code = generate_code()
        if not _code_taken(db, code):
            return code
    raise ProcedureError(ErrorCode.INTERNAL, "Could not allocate a unique plant code")


def is_code_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return CODE_CONSTRAINT in message or "plant.code" in message


def _flush_plant(db: Session) -> None:
    """Flush pending plant changes; a code taken meanwhile is a CONFLICT."""
    try:
        db.flush()
    except IntegrityError as exc:
        if is_code_violation(exc):
            raise ProcedureError(ErrorCode.CONFLICT, "Plant code already exists") from exc
        raise


def _check_references(db: Session, values: dict) -> None:
    for field, model, label in _REFERENCES:
        if values.get(field) is not None and db.get(model, values[field]) is None:
            raise not_found(label)


def _descends_from(db: Session, plant_id: int, ancestor_id: int) -> bool:
    """True when ``ancestor_id`` appears on the mother chain of ``plant_id``."""
    seen = set()
    current = plant_id
    while current is not None and current not in seen:
        if current == ancestor_id:
            return True
        seen.add(current)
        current = db.query(Plant.mother_id).filter(Plant.id == current).scalar()
    return False


def list_plants(
    ctx: ProcedureContext,
    batch_id: Optional[int] = None,
    genetic_id: Optional[int] = None,
) -> List[Plant]:
    query = ctx.db.query(Plant).options(joinedload(Plant.genetic), joinedload(Plant.batch))
    if batch_id is not None:
        query = query.filter(Plant.batch_id == batch_id)
    if genetic_id is not None:
        query = query.filter(Plant.genetic_id == genetic_id)
    return query.order_by(Plant.created_at.desc(), Plant.id.desc()).all()


def get_by_code(ctx: ProcedureContext, code: str) -> Plant:
    plant = (
        ctx.db.query(Plant)
        .options(
            joinedload(Plant.genetic),
            joinedload(Plant.batch),
            joinedload(Plant.location),
            joinedload(Plant.mother),
        )
        .filter(Plant.code == code)
        .first()
    )
    if plant is None:
        raise not_found("Plant")
    return plant


def create(ctx: ProcedureContext, data: PlantCreate) -> Plant:
    values = data.model_dump()

    with store_errors(ctx.db, "Failed to create plant"):
        _check_references(ctx.db, values)

        if data.code is None:
            values["code"] = _free_code(ctx.db)
        elif _code_taken(ctx.db, data.code):
            raise ProcedureError(ErrorCode.CONFLICT, "Plant code already exists")

        if data.mother_id is not None and data.generation is None:
            mother = ctx.db.get(Plant, data.mother_id)
            if mother.generation is not None:
                values["generation"] = mother.generation + 1

        plant = Plant(**values, created_by_id=ctx.user.id)
        ctx.db.add(plant)
        _flush_plant(ctx.db)
        sync_plant_count(ctx.db, plant.batch_id)
        log_change(ctx.db, ctx.user, "plant", plant.id, "CREATE", None, entity_to_dict(plant))
        ctx.db.commit()
        ctx.db.refresh(plant)
    return plant


def update(ctx: ProcedureContext, plant_id: int, data: PlantUpdate) -> Plant:
    changes = data.model_dump(exclude_unset=True)

    with store_errors(ctx.db, "Failed to update plant"):
        plant = ctx.db.get(Plant, plant_id)
        if plant is None:
            raise not_found("Plant")

        _check_references(ctx.db, changes)

        mother_id = changes.get("mother_id")
        if mother_id is not None and _descends_from(ctx.db, mother_id, plant.id):
            raise ProcedureError(ErrorCode.BAD_REQUEST, "Mother assignment would create a lineage cycle")

        if "code" in changes and _code_taken(ctx.db, changes["code"], exclude_id=plant.id):
            raise ProcedureError(ErrorCode.CONFLICT, "Plant code already exists")

        plant_date = changes.get("plant_date", plant.plant_date)
        harvest_date = changes.get("harvest_date", plant.harvest_date)
        if plant_date and harvest_date and harvest_date < plant_date:
            raise ProcedureError(ErrorCode.BAD_REQUEST, "harvest_date must be on or after plant_date")

        before = entity_to_dict(plant)
        previous_batch_id = plant.batch_id
        for field, value in changes.items():
            setattr(plant, field, value)
        plant.updated_at = datetime.now(timezone.utc)
        _flush_plant(ctx.db)

        if plant.batch_id != previous_batch_id:
            sync_plant_count(ctx.db, previous_batch_id)
            sync_plant_count(ctx.db, plant.batch_id)

        log_change(ctx.db, ctx.user, "plant", plant.id, "UPDATE", before, entity_to_dict(plant))
        ctx.db.commit()
        ctx.db.refresh(plant)
    return plant


def delete(ctx: ProcedureContext, plant_id: int) -> None:
    with store_errors(ctx.db, "Failed to delete plant"):
        plant = ctx.db.get(Plant, plant_id)
        if plant is None:
            raise not_found("Plant")

        offspring = ctx.db.query(func.count(Plant.id)).filter(Plant.mother_id == plant_id).scalar() or 0
        if offspring > 0:
            raise ProcedureError(
                ErrorCode.PRECONDITION_FAILED,
                "Cannot delete plant that is the mother of other plants",
            )

        before = entity_to_dict(plant)
        batch_id = plant.batch_id
        ctx.db.delete(plant)
        ctx.db.flush()
        sync_plant_count(ctx.db, batch_id)
        log_change(ctx.db, ctx.user, "plant", plant_id, "DELETE", before, None)
        ctx.db.commit()

    logger.info("Deleted plant %s (%s)", plant_id, before["code"])
