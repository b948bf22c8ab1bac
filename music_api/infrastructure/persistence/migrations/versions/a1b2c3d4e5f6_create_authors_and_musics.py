"""create authors and musics tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

Authors own musics (ON DELETE CASCADE). Email is unique; (name, author_id)
is unique; duration must be positive.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_authors_email", "authors", ["email"], unique=True)

    op.create_table(
        "musics",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("duration_seconds", sa.Integer(), nullable=False),
        sa.Column("genre", sa.String(length=100), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("name", "author_id", name="uq_music_name_author"),
        sa.CheckConstraint("duration_seconds > 0", name="music_duration_positive_check"),
    )
    op.create_index("ix_musics_author_id", "musics", ["author_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_musics_author_id", table_name="musics")
    op.drop_table("musics")
    op.drop_index("ix_authors_email", table_name="authors")
    op.drop_table("authors")
