"""Initial schema - file, knowledge, document, annotation.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "file",
        sa.Column("digest", sa.String(64), primary_key=True),
        sa.Column("media_type", sa.String(255), nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("storage_url", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("size >= 0", name="ck_file_size_non_negative"),
    )

    op.create_table(
        "knowledge",
        sa.Column("digest", sa.String(64), primary_key=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("extracted_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "document",
        sa.Column("project_id", sa.String(255), primary_key=True),
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("file_digest", sa.String(64), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("file_name", sa.Text(), nullable=False),
        sa.Column("media_type", sa.String(255), nullable=False),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trash_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "metadata",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.CheckConstraint(
            "(deleted_at IS NULL) = (trash_until IS NULL)",
            name="ck_document_trash_markers",
        ),
    )
    # Reference counting: active documents by digest
    op.create_index(
        "ix_document_active_digest",
        "document",
        ["file_digest"],
        postgresql_where=sa.text("deleted_at IS NULL"),
    )
    # Garbage collection: trashed documents by expiry
    op.create_index(
        "ix_document_trash_until",
        "document",
        ["trash_until"],
        postgresql_where=sa.text("deleted_at IS NOT NULL"),
    )

    op.create_table(
        "annotation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("project_id", sa.String(255), nullable=False),
        sa.Column("document_id", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("page_number", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("color", sa.String(32), nullable=True),
        sa.Column(
            "position",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id", "document_id"],
            ["document.project_id", "document.id"],
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_annotation_document", "annotation", ["project_id", "document_id"]
    )


def downgrade() -> None:
    op.drop_table("annotation")
    op.drop_table("document")
    op.drop_table("knowledge")
    op.drop_table("file")
