"""Cultivation schema: users, locations, genetics, batches, plants, audit log.

Revision ID: 0001_cultivation_schema
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_cultivation_schema"
down_revision = None
branch_labels = None
depends_on = None

ENUMS = {
    "genetic_type": ("sativa", "indica", "hybrid"),
    "batch_status": ("active", "completed", "archived"),
    "plant_source": ("seed", "clone", "mother", "tissue_culture"),
    "plant_stage": ("seedling", "vegetative", "flowering", "harvested", "mother", "destroyed"),
    "plant_sex": ("male", "female", "hermaphrodite"),
    "health_status": ("healthy", "sick", "pests", "nutrient_deficiency", "dead"),
}


def _enum(name: str) -> sa.Enum:
    return sa.Enum(*ENUMS[name], name=name)


def upgrade() -> None:
    # ── Accounts & facility ───────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255)),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "location",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )

    # ── Cultivation ───────────────────────────────────────────
    op.create_table(
        "genetic",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("type", _enum("genetic_type"), nullable=False),
        sa.Column("breeder", sa.String(255)),
        sa.Column("description", sa.Text()),
        sa.Column("flowering_time", sa.Integer()),
        sa.Column("thc_potential", sa.Numeric()),
        sa.Column("cbd_potential", sa.Numeric()),
        sa.Column("terpene_profile", sa.JSON()),
        sa.Column("growth_characteristics", sa.JSON()),
        sa.Column("lineage", sa.JSON()),
        sa.Column("created_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("slug", name="uq_genetic_slug"),
        sa.CheckConstraint("thc_potential IS NULL OR (thc_potential >= 0 AND thc_potential <= 100)", name="ck_genetic_thc_range"),
        sa.CheckConstraint("cbd_potential IS NULL OR (cbd_potential >= 0 AND cbd_potential <= 100)", name="ck_genetic_cbd_range"),
    )
    op.create_index("genetic_name_idx", "genetic", ["name"])
    op.create_index("genetic_type_idx", "genetic", ["type"])
    op.create_index("genetic_created_by_idx", "genetic", ["created_by_id"])

    op.create_table(
        "batches",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("strain", sa.String(255), nullable=False),
        sa.Column("genetic_id", sa.Integer(), sa.ForeignKey("genetic.id")),
        sa.Column("start_date", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("end_date", sa.DateTime(timezone=True)),
        sa.Column("status", _enum("batch_status"), nullable=False, server_default="active"),
        sa.Column("plant_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text()),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.CheckConstraint("plant_count >= 0", name="ck_batches_plant_count_non_negative"),
    )
    op.create_index("batch_name_idx", "batches", ["name"])
    op.create_index("batch_status_idx", "batches", ["status"])
    op.create_index("batch_user_id_idx", "batches", ["user_id"])
    op.create_index("batch_genetic_id_idx", "batches", ["genetic_id"])

    op.create_table(
        "plant",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("genetic_id", sa.Integer(), sa.ForeignKey("genetic.id")),
        sa.Column("batch_id", sa.Integer(), sa.ForeignKey("batches.id")),
        sa.Column("source", _enum("plant_source"), nullable=False),
        sa.Column("stage", _enum("plant_stage"), nullable=False),
        sa.Column("plant_date", sa.Date()),
        sa.Column("harvest_date", sa.Date()),
        sa.Column("mother_id", sa.Integer(), sa.ForeignKey("plant.id")),
        sa.Column("generation", sa.Integer()),
        sa.Column("sex", _enum("plant_sex")),
        sa.Column("phenotype", sa.String(255)),
        sa.Column("health_status", _enum("health_status"), nullable=False, server_default="healthy"),
        sa.Column("quarantine", sa.Boolean, server_default=sa.false()),
        sa.Column("destroy_reason", sa.String(255)),
        sa.Column("location_id", sa.Integer(), sa.ForeignKey("location.id")),
        sa.Column("created_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.UniqueConstraint("code", name="uq_plant_code"),
    )
    op.create_index("plant_batch_id_idx", "plant", ["batch_id"])
    op.create_index("plant_stage_idx", "plant", ["stage"])
    op.create_index("plant_created_by_idx", "plant", ["created_by_id"])
    op.create_index("plant_genetic_id_idx", "plant", ["genetic_id"])
    op.create_index("plant_location_id_idx", "plant", ["location_id"])
    op.create_index("plant_mother_id_idx", "plant", ["mother_id"])

    # ── Audit ─────────────────────────────────────────────────
    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(10), nullable=False),
        sa.Column("diff_json", sa.JSON(), nullable=False),
    )
    op.create_index("ix_audit_log_timestamp", "audit_log", ["timestamp"])
    op.create_index("ix_audit_log_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("plant")
    op.drop_table("batches")
    op.drop_table("genetic")
    op.drop_table("location")
    op.drop_table("users")
    bind = op.get_bind()
    for name in ENUMS:
        sa.Enum(name=name).drop(bind, checkfirst=True)
