from growtrack.models import BatchStatus, GeneticType
from growtrack.procedures import dashboard
from growtrack.schemas import BatchUpdate, PlantUpdate
from growtrack.procedures import batch as batch_procedures
from growtrack.procedures import plant as plant_procedures


def test_strain_distribution_lists_every_type(ctx):
    rows = dashboard.strain_distribution(ctx)

    assert {row["type"] for row in rows} == set(GeneticType)
    assert all(row["count"] == 0 for row in rows)


def test_strain_distribution_counts_plants_per_type(ctx, make_genetic, make_plant):
    indica = make_genetic("Northern Lights", type=GeneticType.INDICA)
    hybrid = make_genetic("Blue Dream", type=GeneticType.HYBRID)
    make_plant(genetic_id=indica.id)
    make_plant(genetic_id=indica.id)
    make_plant(genetic_id=hybrid.id)
    make_plant()

    counts = {row["type"]: row["count"] for row in dashboard.strain_distribution(ctx)}

    assert counts == {GeneticType.SATIVA: 0, GeneticType.INDICA: 2, GeneticType.HYBRID: 1}


def test_summary_counts(ctx, make_genetic, make_batch, make_plant):
    make_genetic("Blue Dream")
    make_batch("Active")
    finished = make_batch("Finished")
    batch_procedures.update(ctx, finished.id, BatchUpdate(status=BatchStatus.COMPLETED))
    make_plant()
    sick = make_plant()
    plant_procedures.update(ctx, sick.id, PlantUpdate(quarantine=True))

    assert dashboard.summary(ctx) == {
        "genetics": 1,
        "active_batches": 1,
        "plants": 2,
        "quarantined_plants": 1,
    }
