"""create blogful tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blogful_articles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("style", sa.Text(), nullable=False),
        sa.Column(
            "date_published",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_table(
        "blogful_users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("fullname", sa.Text(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("nickname", sa.Text(), nullable=True),
        sa.Column("password", sa.Text(), nullable=True),
        sa.Column(
            "date_created",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_table(
        "blogful_comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "date_commented",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "article_id",
            sa.Integer(),
            sa.ForeignKey("blogful_articles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("blogful_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_blogful_comments_article_id", "blogful_comments", ["article_id"])
    op.create_index("ix_blogful_comments_user_id", "blogful_comments", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_blogful_comments_user_id", table_name="blogful_comments")
    op.drop_index("ix_blogful_comments_article_id", table_name="blogful_comments")
    op.drop_table("blogful_comments")
    op.drop_table("blogful_users")
    op.drop_table("blogful_articles")
