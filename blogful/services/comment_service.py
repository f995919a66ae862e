"""
Comment service: data access for the ``blogful_comments`` table.

The referenced article and user are not looked up here; a dangling
``article_id`` / ``user_id`` is rejected by the store's foreign keys, where
the store enforces them.
"""
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.models import Comment


async def get_all_comments(db: AsyncSession) -> list[Comment]:
    result = await db.execute(select(Comment).order_by(Comment.id))
    return list(result.scalars().all())


async def get_comment_by_id(db: AsyncSession, comment_id: int) -> Comment | None:
    result = await db.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def insert_comment(db: AsyncSession, new_comment: dict[str, Any]) -> Comment:
    """
    Insert a new comment and return the stored row.

    ``date_commented`` is optional: when the caller leaves it out (or
    passes None) the column's server default stamps the current time.
    """
    comment = Comment(**{k: v for k, v in new_comment.items() if v is not None})
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return comment


async def update_comment_by_id(db: AsyncSession, comment_id: int, fields: dict[str, Any]) -> int:
    result = await db.execute(
        update(Comment).where(Comment.id == comment_id).values(**fields)
    )
    return result.rowcount


async def delete_comment_by_id(db: AsyncSession, comment_id: int) -> int:
    result = await db.execute(delete(Comment).where(Comment.id == comment_id))
    return result.rowcount
