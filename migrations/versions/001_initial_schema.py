"""Initial schema: offered trips.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── trips ─────────────────────────────────────────────────────────
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("driver_id", sa.String(64), nullable=False),
        sa.Column("driver_name", sa.String(120), nullable=False),
        sa.Column("driver_rating", sa.Float, default=5.0, nullable=False),
        sa.Column("is_verified", sa.Boolean, default=False, nullable=False),
        sa.Column("allows_smoking", sa.Boolean, default=False, nullable=False),
        sa.Column("allows_music", sa.Boolean, default=True, nullable=False),
        sa.Column("allows_pets", sa.Boolean, default=False, nullable=False),
        sa.Column(
            "conversation_level",
            sa.Enum("QUIET", "MODERATE", "CHATTY", name="conversationlevel"),
            default="MODERATE",
            nullable=False,
        ),
        sa.Column(
            "temperature_preference",
            sa.Enum("COLD", "MODERATE", "WARM", name="temperaturepreference"),
            default="MODERATE",
            nullable=False,
        ),
        sa.Column("origin_lat", sa.Float, nullable=False),
        sa.Column("origin_lng", sa.Float, nullable=False),
        sa.Column("origin_address", sa.String(255), nullable=False),
        sa.Column("destination_lat", sa.Float, nullable=False),
        sa.Column("destination_lng", sa.Float, nullable=False),
        sa.Column("destination_address", sa.String(255), nullable=False),
        sa.Column("stops", sa.JSON, nullable=False),
        sa.Column("origin_h3_cell", sa.String(20), nullable=False),
        sa.Column("price_per_seat", sa.Float, nullable=False),
        sa.Column("departure_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("available_seats", sa.Integer, default=1, nullable=False),
        sa.Column("vehicle_type", sa.String(40), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_trips_origin_cell", "trips", ["origin_h3_cell"])
    op.create_index("idx_trips_departure", "trips", ["departure_time"])
    op.create_index("idx_trips_driver", "trips", ["driver_id"])


def downgrade() -> None:
    op.drop_table("trips")
    op.execute("DROP TYPE IF EXISTS conversationlevel")
    op.execute("DROP TYPE IF EXISTS temperaturepreference")
