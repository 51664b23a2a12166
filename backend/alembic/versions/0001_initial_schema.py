"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates the live record table and the snapshot table used by clear / undo.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- records ---
    op.create_table(
        "records",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("collection", sa.String(32), nullable=False),
        sa.Column("record_id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data", sa.JSON, nullable=False),
        sa.UniqueConstraint("collection", "record_id", name="uq_records_collection_record_id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_records_collection_created_at", "records", ["collection", "created_at"])

    # --- snapshots ---
    op.create_table(
        "snapshots",
        sa.Column("snapshot_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("collection", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.String(500), nullable=True),
        sa.Column("records", sa.JSON, nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_snapshots_collection_created_at", "snapshots", ["collection", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_snapshots_collection_created_at", table_name="snapshots")
    op.drop_table("snapshots")
    op.drop_index("ix_records_collection_created_at", table_name="records")
    op.drop_table("records")
