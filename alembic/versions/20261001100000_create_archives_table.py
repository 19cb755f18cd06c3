"""Create archives table for uploaded document metadata.

uploader_id is deliberately not a foreign key: deleting a user keeps their archives.

Revision ID: 20261001100000
Revises: 20261001000000
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261001100000"
down_revision: Union[str, None] = "20261001000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "archives",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("original_filename", sa.String(length=512), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("mime_type", sa.String(length=255), nullable=False),
        sa.Column("uploader_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_archives")),
        sa.UniqueConstraint("filename", name=op.f("uq_archives_filename")),
    )
    op.create_index(op.f("ix_archives_category"), "archives", ["category"], unique=False)
    op.create_index(op.f("ix_archives_uploader_id"), "archives", ["uploader_id"], unique=False)
    op.create_index(op.f("ix_archives_created_at"), "archives", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_archives_created_at"), table_name="archives")
    op.drop_index(op.f("ix_archives_uploader_id"), table_name="archives")
    op.drop_index(op.f("ix_archives_category"), table_name="archives")
    op.drop_table("archives")
