"""
Article service: data access for the ``blogful_articles`` table.

Each function is a thin translation of one logical operation into a single
SQLAlchemy statement.  Validation happens in the router before any of these
are called.  Service functions flush but do not commit; the transaction
boundary is owned by the ``get_db`` dependency in the router layer.
"""
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.models import Article


async def get_all_articles(db: AsyncSession) -> list[Article]:
    result = await db.execute(select(Article).order_by(Article.id))
    return list(result.scalars().all())


async def get_article_by_id(db: AsyncSession, article_id: int) -> Article | None:
    result = await db.execute(select(Article).where(Article.id == article_id))
    return result.scalar_one_or_none()


async def insert_article(db: AsyncSession, new_article: dict[str, Any]) -> Article:
    """
    Insert a new article and return the stored row.

    ``None`` values are dropped so the server default for
    ``date_published`` applies; the refresh loads it back.
    """
    article = Article(**{k: v for k, v in new_article.items() if v is not None})
    db.add(article)
    await db.flush()
    await db.refresh(article)
    return article


async def update_article_by_id(db: AsyncSession, article_id: int, fields: dict[str, Any]) -> int:
    """Write only *fields* to the matching row; returns the affected row count."""
    result = await db.execute(
        update(Article).where(Article.id == article_id).values(**fields)
    )
    return result.rowcount


async def delete_article_by_id(db: AsyncSession, article_id: int) -> int:
    result = await db.execute(delete(Article).where(Article.id == article_id))
    return result.rowcount
