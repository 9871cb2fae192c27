"""Genetic data access procedures.

Every procedure takes the request's :class:`ProcedureContext` first. Mutations
commit their own transaction; store failures surface as INTERNAL
:class:`ProcedureError`s carrying the original exception.
"""
import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from growtrack.audit import entity_history, entity_to_dict, log_change
from growtrack.config import settings
from growtrack.models import AuditLog, Batch, Genetic, Plant
from growtrack.procedures.context import ProcedureContext
from growtrack.procedures.errors import ErrorCode, ProcedureError, not_found, store_errors
from growtrack.procedures.slugs import is_slug_violation, unique_slug
from growtrack.procedures.sql import json_array_agg, json_summary
from growtrack.schemas import GeneticCreate, GeneticUpdate

logger = logging.getLogger("growtrack.procedures.genetic")

DECIMAL_FIELDS = ("thc_potential", "cbd_potential")
NESTED_FIELDS = ("growth_characteristics", "lineage")


def to_decimal(value: Optional[float]) -> Optional[Decimal]:
    """Exact decimal from the number's text form, so 12.5 stays 12.5."""
    if value is None:
        return None
    return Decimal(str(value))


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    values = dict(data)
    for field in DECIMAL_FIELDS:
        if field in values:
            values[field] = to_decimal(values[field])
    for field in NESTED_FIELDS:
        if values.get(field) is not None:
            values[field] = {k: v for k, v in values[field].items() if v is not None}
    return values


def _json_list(value: Any) -> List[dict]:
    if value is None:
        return []
    if isinstance(value, str):
        value = json.loads(value)
    return list(value)


def _count_of(model, fk_column):
    return (
        select(func.count(model.id))
        .where(fk_column == Genetic.id)
        .correlate(Genetic)
        .scalar_subquery()
    )


def get_by_slug(ctx: ProcedureContext, slug: str) -> dict:
    """Genetic with plant/batch counts and JSON summaries of both."""
    plants = (
        select(json_array_agg(json_summary(
            id=Plant.id,
            code=Plant.code,
            stage=Plant.stage,
            health_status=Plant.health_status,
            plant_date=Plant.plant_date,
        )))
        .where(Plant.genetic_id == Genetic.id)
        .correlate(Genetic)
        .scalar_subquery()
    )
    batches = (
        select(json_array_agg(json_summary(
            id=Batch.id,
            name=Batch.name,
            status=Batch.status,
            plant_count=Batch.plant_count,
            created_at=Batch.created_at,
        )))
        .where(Batch.genetic_id == Genetic.id)
        .correlate(Genetic)
        .scalar_subquery()
    )

    row = ctx.db.execute(
        select(
            Genetic,
            _count_of(Plant, Plant.genetic_id).label("plant_count"),
            _count_of(Batch, Batch.genetic_id).label("batch_count"),
            plants.label("plants"),
            batches.label("batches"),
        )
        .where(Genetic.slug == slug)
        .limit(1)
    ).first()

    if row is None:
        raise not_found("Genetic")

    genetic = row.Genetic
    detail = {column.key: getattr(genetic, column.key) for column in Genetic.__table__.columns}
    detail.update(
        plant_count=row.plant_count or 0,
        batch_count=row.batch_count or 0,
        plants=_json_list(row.plants),
        batches=_json_list(row.batches),
    )
    return detail


def list_genetics(ctx: ProcedureContext) -> List[Genetic]:
    """All genetics ordered by name, each with its creator loaded."""
    return (
        ctx.db.query(Genetic)
        .options(joinedload(Genetic.created_by))
        .order_by(Genetic.name, Genetic.id)
        .all()
    )


def create(ctx: ProcedureContext, data: GeneticCreate) -> Genetic:
    values = _column_values(data.model_dump())

    with store_errors(ctx.db, "Failed to create genetic"):
        for attempt in range(settings.slug_max_attempts):
            genetic = Genetic(
                **values,
                slug=unique_slug(ctx.db, data.name, attempt=attempt),
                created_by_id=ctx.user.id,
            )
            ctx.db.add(genetic)
            try:
                ctx.db.flush()
            except IntegrityError as exc:
                ctx.db.rollback()
                if not is_slug_violation(exc) or attempt + 1 >= settings.slug_max_attempts:
                    raise
                logger.warning("Slug %r rejected by unique constraint, retrying", genetic.slug)
                continue

            log_change(ctx.db, ctx.user, "genetic", genetic.id, "CREATE", None, entity_to_dict(genetic))
            ctx.db.commit()
            ctx.db.refresh(genetic)
            return genetic


def update(ctx: ProcedureContext, genetic_id: int, data: GeneticUpdate) -> Genetic:
    """Apply the fields present in ``data``; a new name also moves the slug."""
    changes = _column_values(data.model_dump(exclude_unset=True))

    with store_errors(ctx.db, "Failed to update genetic"):
        for attempt in range(settings.slug_max_attempts):
            genetic = ctx.db.get(Genetic, genetic_id)
            if genetic is None:
                raise not_found("Genetic")

            before = entity_to_dict(genetic)
            values = dict(changes)
            if "name" in values:
                values["slug"] = unique_slug(ctx.db, values["name"], exclude_id=genetic.id, attempt=attempt)
            for field, value in values.items():
                setattr(genetic, field, value)
            genetic.updated_at = datetime.now(timezone.utc)

            try:
                ctx.db.flush()
            except IntegrityError as exc:
                ctx.db.rollback()
                if not is_slug_violation(exc) or attempt + 1 >= settings.slug_max_attempts:
                    raise
                logger.warning("Slug %r rejected by unique constraint, retrying", values.get("slug"))
                continue

            log_change(ctx.db, ctx.user, "genetic", genetic.id, "UPDATE", before, entity_to_dict(genetic))
            ctx.db.commit()
            ctx.db.refresh(genetic)
            return genetic


def delete(ctx: ProcedureContext, genetic_id: int) -> None:
    """Delete a genetic no plant or batch refers to."""
    with store_errors(ctx.db, "Failed to delete genetic"):
        genetic = ctx.db.get(Genetic, genetic_id)
        if genetic is None:
            raise not_found("Genetic")

        plants_count = ctx.db.query(func.count(Plant.id)).filter(Plant.genetic_id == genetic_id).scalar() or 0
        batches_count = ctx.db.query(func.count(Batch.id)).filter(Batch.genetic_id == genetic_id).scalar() or 0

        if plants_count > 0:
            raise ProcedureError(
                ErrorCode.PRECONDITION_FAILED,
                "Cannot delete genetic that is in use by plants",
            )
        if batches_count > 0:
            raise ProcedureError(
                ErrorCode.PRECONDITION_FAILED,
                "Cannot delete genetic that is in use by batches",
            )

        before = entity_to_dict(genetic)
        ctx.db.delete(genetic)
        log_change(ctx.db, ctx.user, "genetic", genetic_id, "DELETE", before, None)
        ctx.db.commit()

    logger.info("Deleted genetic %s (%s)", genetic_id, before["slug"])


def history(ctx: ProcedureContext, genetic_id: int, limit: int = 50) -> List[AuditLog]:
    if ctx.db.get(Genetic, genetic_id) is None:
        raise not_found("Genetic")
    return entity_history(ctx.db, "genetic", genetic_id, limit)
