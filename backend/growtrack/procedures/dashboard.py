"""Aggregates behind the dashboard charts."""
from typing import List

from sqlalchemy import func

from growtrack.models import Batch, BatchStatus, Genetic, GeneticType, Plant
from growtrack.procedures.context import ProcedureContext


def strain_distribution(ctx: ProcedureContext) -> List[dict]:
    """Plant counts per genetic type; every type is listed, plants without a genetic are not."""
    rows = (
        ctx.db.query(Genetic.type, func.count(Plant.id))
        .join(Plant, Plant.genetic_id == Genetic.id)
        .group_by(Genetic.type)
        .all()
    )
    counts = {genetic_type: 0 for genetic_type in GeneticType}
    for genetic_type, count in rows:
        counts[GeneticType(genetic_type)] = count
    return [{"type": genetic_type, "count": count} for genetic_type, count in counts.items()]


def summary(ctx: ProcedureContext) -> dict:
    db = ctx.db
    return {
        "genetics": db.query(func.count(Genetic.id)).scalar() or 0,
        "active_batches": db.query(func.count(Batch.id)).filter(Batch.status == BatchStatus.ACTIVE).scalar() or 0,
        "plants": db.query(func.count(Plant.id)).scalar() or 0,
        "quarantined_plants": db.query(func.count(Plant.id)).filter(Plant.quarantine.is_(True)).scalar() or 0,
    }
