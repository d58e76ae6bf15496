"""player_saves table

Revision ID: 0001_player_saves
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001_player_saves"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "player_saves",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("external_token", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("state", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_player_saves_external_token", "player_saves", ["external_token"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_player_saves_external_token", table_name="player_saves")
    op.drop_table("player_saves")
