"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- user
- travel, itinerary
- place (unique external_id + provider)
- activity (double precision order_index)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # user table
    op.create_table(
        "user",
        sa.Column("user_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("email"),
    )

    # travel table
    op.create_table(
        "travel",
        sa.Column("travel_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["user.user_id"]),
    )
    op.create_index("idx_travel_owner", "travel", ["owner_id", "created_at"])

    # itinerary table
    op.create_table(
        "itinerary",
        sa.Column("itinerary_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("travel_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("day", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["travel_id"], ["travel.travel_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_itinerary_travel", "itinerary", ["travel_id", "day"])

    # place table
    op.create_table(
        "place",
        sa.Column("place_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 7), nullable=False),
        sa.Column("longitude", sa.Numeric(10, 7), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("external_id", sa.Text(), nullable=True),
        sa.Column("provider", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.UniqueConstraint("external_id", "provider", name="uq_place_external"),
    )
    op.create_index("idx_place_name", "place", ["name"])

    # activity table
    op.create_table(
        "activity",
        sa.Column("activity_id", postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("travel_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("itinerary_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("place_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("latitude", sa.Double(), nullable=False),
        sa.Column("longitude", sa.Double(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("start_time", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Double(), server_default=sa.text("0"), nullable=False),
        sa.Column("created_by_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["travel_id"], ["travel.travel_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["itinerary_id"], ["itinerary.itinerary_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["place_id"], ["place.place_id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by_id"], ["user.user_id"]),
    )
    op.create_index("idx_activity_itinerary_order", "activity", ["itinerary_id", "order_index"])
    op.create_index(
        "idx_activity_travel_bucket_order", "activity", ["travel_id", "itinerary_id", "order_index"]
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("activity")
    op.drop_table("place")
    op.drop_table("itinerary")
    op.drop_table("travel")
    op.drop_table("user")
