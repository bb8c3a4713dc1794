"""Initial catalog schema.

Revision ID: 0001_initial_catalog
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_catalog"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "remote_assets",
        sa.Column("source_name", sa.String(), nullable=False),
        sa.Column("source_asset_id", sa.String(), nullable=False),
        sa.Column("filename", sa.String(), nullable=False),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("created_utc", sa.DateTime(timezone=True), nullable=True),
        sa.Column("media_type", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("source_name", "source_asset_id", name="pk_remote_assets"),
    )
    op.create_index("ix_remote_assets_source", "remote_assets", ["source_name"])

    op.create_table(
        "local_files",
        sa.Column("full_path", sa.String(), nullable=False),
        sa.Column("filename", sa.String(), nullable=False),
        sa.Column("size_bytes", sa.BigInteger(), nullable=False),
        sa.Column("last_write_utc", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scan_position", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("full_path", name="pk_local_files"),
    )
    op.create_index(
        "ix_local_files_filename_size", "local_files", ["filename", "size_bytes"]
    )

    op.create_table(
        "diff_results",
        sa.Column("source_name", sa.String(), nullable=False),
        sa.Column("source_asset_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("matched_local_path", sa.String(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("source_name", "source_asset_id", name="pk_diff_results"),
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("job_type", sa.String(length=16), nullable=False),
        sa.Column("source_name", sa.String(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("detail", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_jobs"),
    )


def downgrade() -> None:
    op.drop_table("jobs")
    op.drop_table("diff_results")
    op.drop_index("ix_local_files_filename_size", table_name="local_files")
    op.drop_table("local_files")
    op.drop_index("ix_remote_assets_source", table_name="remote_assets")
    op.drop_table("remote_assets")
