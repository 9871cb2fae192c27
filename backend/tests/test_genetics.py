"""Genetic procedures: slugs, aggregates, partial updates and delete guards."""
import re
from decimal import Decimal

import pytest

from growtrack.models import Genetic, GeneticType
from growtrack.procedures import ErrorCode, ProcedureError
from growtrack.procedures import genetic as genetic_procedures
from growtrack.schemas import GeneticDetail, GeneticUpdate

SUFFIXED = re.compile(r"^blue-dream-\d{4}$")


def test_create_derives_slug_and_stores_fields(make_genetic, user):
    genetic = make_genetic(
        "Blue Dream",
        breeder="  Humboldt  ",
        thc_potential=21.0,
        terpene_profile={"myrcene": 0.8},
        lineage={"mother": "Blueberry", "father": "Haze"},
    )

    assert genetic.id is not None
    assert genetic.slug == "blue-dream"
    assert genetic.type == GeneticType.HYBRID
    assert genetic.breeder == "Humboldt"
    assert genetic.thc_potential == Decimal("21.0")
    assert genetic.terpene_profile == {"myrcene": 0.8}
    assert genetic.lineage == {"mother": "Blueberry", "father": "Haze"}
    assert genetic.created_by_id == user.id


def test_same_name_twice_gets_time_suffix(make_genetic):
    first = make_genetic("Blue Dream")
    second = make_genetic("Blue Dream")

    assert first.slug == "blue-dream"
    assert SUFFIXED.match(second.slug)
    assert first.id != second.id


def test_slug_retries_when_constraint_rejects_candidate(ctx, make_genetic, monkeypatch):
    make_genetic("Blue Dream")
    real_unique_slug = genetic_procedures.unique_slug

    def racing_slug(db, name, exclude_id=None, attempt=0):
        # Another writer took the base slug between check and insert.
        if attempt == 0:
            return "blue-dream"
        return real_unique_slug(db, name, exclude_id=exclude_id, attempt=attempt)

    monkeypatch.setattr(genetic_procedures, "unique_slug", racing_slug)
    second = make_genetic("Blue Dream")

    assert SUFFIXED.match(second.slug)
    assert ctx.db.query(Genetic).count() == 2


def test_rename_onto_taken_slug_is_suffixed(ctx, make_genetic):
    owner = make_genetic("OG Kush")
    other = make_genetic("Sour Diesel")

    renamed = genetic_procedures.update(ctx, other.id, GeneticUpdate(name="OG Kush"))

    assert re.match(r"^og-kush-\d{4}$", renamed.slug)
    assert renamed.name == "OG Kush"
    ctx.db.refresh(owner)
    assert owner.slug == "og-kush"
    assert owner.name == "OG Kush"


def test_rename_to_own_name_keeps_slug(ctx, make_genetic):
    genetic = make_genetic("Gelato")

    updated = genetic_procedures.update(ctx, genetic.id, GeneticUpdate(name="Gelato"))

    assert updated.slug == "gelato"


def test_update_applies_only_fields_present(ctx, make_genetic):
    genetic = make_genetic("Gelato", breeder="Cookies", flowering_time=60)

    updated = genetic_procedures.update(ctx, genetic.id, GeneticUpdate(description="Dessert strain"))

    assert updated.description == "Dessert strain"
    assert updated.name == "Gelato"
    assert updated.breeder == "Cookies"
    assert updated.flowering_time == 60
    assert updated.updated_at is not None


def test_update_with_explicit_null_clears_optional_field(ctx, make_genetic):
    genetic = make_genetic("Gelato", breeder="Cookies")

    updated = genetic_procedures.update(ctx, genetic.id, GeneticUpdate(breeder=None))

    assert updated.breeder is None


def test_update_rejects_null_name():
    with pytest.raises(ValueError):
        GeneticUpdate.model_validate({"name": None})


def test_thc_potential_round_trips_exactly(ctx, make_genetic):
    genetic = make_genetic("Gelato")

    genetic_procedures.update(ctx, genetic.id, GeneticUpdate(thc_potential=12.5))
    ctx.db.expire_all()
    stored = ctx.db.get(Genetic, genetic.id)

    assert stored.thc_potential == Decimal("12.5")
    assert float(stored.thc_potential) == 12.5


def test_update_missing_genetic_is_not_found(ctx):
    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.update(ctx, 999, GeneticUpdate(name="Ghost"))
    assert excinfo.value.code == ErrorCode.NOT_FOUND


def test_list_orders_by_name(ctx, make_genetic):
    for name in ("Zeta", "Alpha", "Mango"):
        make_genetic(name)

    names = [genetic.name for genetic in genetic_procedures.list_genetics(ctx)]

    assert names == ["Alpha", "Mango", "Zeta"]


def test_list_loads_creator(ctx, make_genetic, user):
    make_genetic("Alpha")

    (genetic,) = genetic_procedures.list_genetics(ctx)

    assert genetic.created_by.email == user.email


def test_get_by_slug_without_related_rows_has_empty_lists(ctx, make_genetic):
    make_genetic("Lonely")

    detail = genetic_procedures.get_by_slug(ctx, "lonely")

    assert detail["plant_count"] == 0
    assert detail["batch_count"] == 0
    assert detail["plants"] == []
    assert detail["batches"] == []


def test_get_by_slug_summarises_plants_and_batches(ctx, make_genetic, make_batch, make_plant):
    genetic = make_genetic("Blue Dream")
    batch = make_batch("Run 1", genetic_id=genetic.id)
    plant = make_plant(code="BD-001", genetic_id=genetic.id, batch_id=batch.id)
    make_plant(code="OTHER-1")

    detail = genetic_procedures.get_by_slug(ctx, "blue-dream")

    assert detail["plant_count"] == 1
    assert detail["batch_count"] == 1
    assert [p["code"] for p in detail["plants"]] == [plant.code]
    assert detail["plants"][0]["stage"] == "seedling"
    assert [b["name"] for b in detail["batches"]] == ["Run 1"]

    parsed = GeneticDetail.model_validate(detail)
    assert parsed.plants[0].code == "BD-001"
    assert parsed.batches[0].plant_count == 1


def test_get_by_slug_missing_is_not_found(ctx):
    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.get_by_slug(ctx, "nope")
    assert excinfo.value.code == ErrorCode.NOT_FOUND
    assert excinfo.value.message == "Genetic not found"


def test_delete_refused_while_plants_reference_it(ctx, make_genetic, make_plant):
    genetic = make_genetic("Blue Dream")
    make_plant(genetic_id=genetic.id)

    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.delete(ctx, genetic.id)

    assert excinfo.value.code == ErrorCode.PRECONDITION_FAILED
    assert "plants" in excinfo.value.message
    assert ctx.db.get(Genetic, genetic.id) is not None


def test_delete_refused_while_batches_reference_it(ctx, make_genetic, make_batch):
    genetic = make_genetic("Blue Dream")
    make_batch(genetic_id=genetic.id)

    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.delete(ctx, genetic.id)

    assert excinfo.value.code == ErrorCode.PRECONDITION_FAILED
    assert "batches" in excinfo.value.message
    assert ctx.db.get(Genetic, genetic.id) is not None


def test_delete_unreferenced_genetic(ctx, make_genetic):
    genetic = make_genetic("Blue Dream")

    genetic_procedures.delete(ctx, genetic.id)

    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.get_by_slug(ctx, "blue-dream")
    assert excinfo.value.code == ErrorCode.NOT_FOUND


def test_delete_missing_genetic_is_not_found(ctx):
    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.delete(ctx, 404)
    assert excinfo.value.code == ErrorCode.NOT_FOUND


def test_store_failure_is_wrapped_as_internal(ctx, make_genetic, monkeypatch):
    genetic = make_genetic("Blue Dream")
    failure = RuntimeError("disk full")

    def broken_commit():
        raise failure

    monkeypatch.setattr(ctx.db, "commit", broken_commit)

    with pytest.raises(ProcedureError) as excinfo:
        genetic_procedures.update(ctx, genetic.id, GeneticUpdate(description="x"))

    assert excinfo.value.code == ErrorCode.INTERNAL
    assert excinfo.value.cause is failure
    assert excinfo.value.__cause__ is failure


def test_history_lists_changes_newest_first(ctx, make_genetic, user):
    genetic = make_genetic("Blue Dream")
    genetic_procedures.update(ctx, genetic.id, GeneticUpdate(flowering_time=63))

    entries = genetic_procedures.history(ctx, genetic.id)

    assert [entry.action for entry in entries] == ["UPDATE", "CREATE"]
    assert entries[0].diff_json["after"]["flowering_time"] == 63
    assert entries[1].diff_json["before"] is None
    assert entries[0].user.email == user.email
