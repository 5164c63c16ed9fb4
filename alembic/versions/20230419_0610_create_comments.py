"""create comments

No foreign key to articles: deleting an article leaves its comments in
place, hidden by the nested routes.

Revision ID: 20230419_0610
Revises: 20230415_0308
Create Date: 2023-04-19 06:10:11
"""
import sqlalchemy as sa
from alembic import op

revision = "20230419_0610"
down_revision = "20230415_0308"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("article_id", sa.Integer(), nullable=False),
        sa.Column("body", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_article_id", "comments", ["article_id"])


def downgrade() -> None:
    op.drop_index("ix_comments_article_id", table_name="comments")
    op.drop_table("comments")
