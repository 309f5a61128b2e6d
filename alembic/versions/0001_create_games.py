"""create games table

Revision ID: 0001_create_games
Revises:
Create Date: 2026-10-18 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_create_games"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "games",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("game_id", sa.String(length=64), nullable=False),
        sa.Column("player_id", sa.String(length=100), nullable=True),
        sa.Column("player_numbers", sa.JSON(), nullable=False),
        sa.Column("drawn_numbers", sa.JSON(), nullable=False),
        sa.Column("stake", sa.Float(), nullable=False),
        sa.Column("total_payout", sa.Float(), nullable=False),
        sa.Column("numbers_matched", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('waiting','ready','playing','finished')",
            name=op.f("games_status_enum_check"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("games_pkey")),
        sa.UniqueConstraint("game_id", name=op.f("games_game_id_key")),
    )
    op.create_index("ix_games_player_id", "games", ["player_id"], unique=False)
    op.create_index("ix_games_status", "games", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_games_status", table_name="games")
    op.drop_index("ix_games_player_id", table_name="games")
    op.drop_table("games")
