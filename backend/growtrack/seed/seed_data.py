"""
Seed data script for the Growtrack database.
Populates a handful of well-known genetics owned by the first active user.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from growtrack.config import settings
from growtrack.models import Genetic, GeneticType, User
from growtrack.procedures import ProcedureContext
from growtrack.procedures import genetic as genetic_procedures
from growtrack.schemas import GeneticCreate

SAMPLE_GENETICS = [
    GeneticCreate(
        name="Blue Dream",
        type=GeneticType.HYBRID,
        breeder="Humboldt Seed Organization",
        description="Sativa-leaning hybrid, vigorous and forgiving.",
        flowering_time=65,
        thc_potential=21.0,
        cbd_potential=0.1,
        terpene_profile={"myrcene": 0.8, "pinene": 0.3, "caryophyllene": 0.2},
        growth_characteristics={"height": 180, "spread": 90, "leaf_pattern": "narrow"},
        lineage={"mother": "Blueberry", "father": "Haze", "generation": 1},
    ),
    GeneticCreate(
        name="OG Kush",
        type=GeneticType.HYBRID,
        description="Classic West Coast cultivar with dense resinous buds.",
        flowering_time=56,
        thc_potential=23.5,
        terpene_profile={"limonene": 0.5, "myrcene": 0.4},
        lineage={"mother": "Chemdawg", "father": "Hindu Kush"},
    ),
    GeneticCreate(
        name="Northern Lights",
        type=GeneticType.INDICA,
        breeder="Sensi Seeds",
        flowering_time=49,
        thc_potential=18.0,
        growth_characteristics={"height": 100, "spread": 70, "internode_spacing": 4},
    ),
    GeneticCreate(
        name="Durban Poison",
        type=GeneticType.SATIVA,
        flowering_time=63,
        thc_potential=17.5,
        cbd_potential=0.2,
        terpene_profile={"terpinolene": 0.6},
    ),
    GeneticCreate(
        name="ACDC",
        type=GeneticType.HYBRID,
        description="High-CBD phenotype of Cannatonic.",
        flowering_time=63,
        thc_potential=1.0,
        cbd_potential=16.0,
    ),
]


def seed_database():
    """Seed the database with sample genetics."""
    engine = create_engine(settings.database_url)
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    session = Session()

    try:
        if session.query(Genetic).first():
            print("Database already seeded, skipping...")
            return

        owner = session.query(User).filter(User.is_active.is_(True)).order_by(User.created_at).first()
        if owner is None:
            print("No active user found. Create one with scripts/add_user.py first.")
            return

        print(f"Seeding database as {owner.email}...")
        ctx = ProcedureContext(db=session, user=owner)
        for data in SAMPLE_GENETICS:
            genetic_procedures.create(ctx, data)

        print(f"✓ Seeded {session.query(Genetic).count()} genetics")
        print("Database seeding complete!")
    finally:
        session.close()


if __name__ == "__main__":
    seed_database()
