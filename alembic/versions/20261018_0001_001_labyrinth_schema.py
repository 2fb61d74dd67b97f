"""Labyrinth and labyrinth solution tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "labyrinths",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.Column("size", sa.String(length=30), nullable=False),
        sa.Column("width", sa.Integer(), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.Column("grid_format", sa.String(length=10), nullable=False),
        sa.Column("difficulty", sa.Integer(), nullable=False),
        sa.Column("remarks", sa.Text(), nullable=False, server_default=""),
        sa.Column("solution_length", sa.Integer(), nullable=False),
        sa.Column("creator_name", sa.String(length=50), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_labyrinths_creator_name"), "labyrinths", ["creator_name"])

    op.create_table(
        "labyrinth_solutions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("labyrinth_id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("solution_time_ms", sa.Integer(), nullable=False),
        sa.Column("step_count", sa.Integer(), nullable=False),
        sa.Column(
            "completed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["labyrinth_id"], ["labyrinths.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_labyrinth_solutions_labyrinth_id"), "labyrinth_solutions", ["labyrinth_id"]
    )
    op.create_index(
        op.f("ix_labyrinth_solutions_username"), "labyrinth_solutions", ["username"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_labyrinth_solutions_username"), table_name="labyrinth_solutions")
    op.drop_index(op.f("ix_labyrinth_solutions_labyrinth_id"), table_name="labyrinth_solutions")
    op.drop_table("labyrinth_solutions")
    op.drop_index(op.f("ix_labyrinths_creator_name"), table_name="labyrinths")
    op.drop_table("labyrinths")
