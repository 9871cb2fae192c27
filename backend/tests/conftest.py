"""Test fixtures for Growtrack.

The suite runs against an in-memory SQLite database; the URL must be set
before ``growtrack`` is imported because settings are read at import time.
"""
from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

import growtrack.models  # noqa: F401
from growtrack.auth import create_access_token
from growtrack.database import Base, SessionLocal, engine, get_db
from growtrack.models import GeneticType, PlantSource, PlantStage, User
from growtrack.procedures import ProcedureContext
from growtrack.procedures import batch as batch_procedures
from growtrack.procedures import genetic as genetic_procedures
from growtrack.procedures import plant as plant_procedures
from growtrack.schemas import BatchCreate, GeneticCreate, PlantCreate


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def user(db) -> User:
    grower = User(email="grower@example.com", name="Grower", password_hash="not-a-bcrypt-hash")
    db.add(grower)
    db.commit()
    db.refresh(grower)
    return grower


@pytest.fixture()
def ctx(db, user) -> ProcedureContext:
    return ProcedureContext(db=db, user=user)


@pytest.fixture()
def make_genetic(ctx):
    def _make(name: str = "Blue Dream", **fields):
        fields.setdefault("type", GeneticType.HYBRID)
        return genetic_procedures.create(ctx, GeneticCreate(name=name, **fields))
    return _make


@pytest.fixture()
def make_batch(ctx):
    def _make(name: str = "Spring Run", **fields):
        if "genetic_id" not in fields:
            fields.setdefault("strain", "Mixed")
        return batch_procedures.create(ctx, BatchCreate(name=name, **fields))
    return _make


@pytest.fixture()
def make_plant(ctx):
    def _make(**fields):
        fields.setdefault("source", PlantSource.SEED)
        fields.setdefault("stage", PlantStage.SEEDLING)
        return plant_procedures.create(ctx, PlantCreate(**fields))
    return _make


@pytest.fixture()
def client(db, user):
    from growtrack.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        test_client.headers["Authorization"] = f"Bearer {create_access_token(user)}"
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def anonymous_client(db):
    from growtrack.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
