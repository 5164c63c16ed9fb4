"""create articles

Revision ID: 20230415_0308
Revises:
Create Date: 2023-04-15 03:08:12
"""
import sqlalchemy as sa
from alembic import op

revision = "20230415_0308"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("articles")
