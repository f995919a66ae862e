"""
User service: data access for the ``blogful_users`` table.

Passwords are hashed here, on the way into the store, so no code path can
persist a plaintext credential regardless of which router calls in.
"""
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.models import User
from blogful.security import hash_password


def _with_hashed_password(fields: dict[str, Any]) -> dict[str, Any]:
    fields = dict(fields)
    if fields.get("password"):
        fields["password"] = hash_password(fields["password"])
    return fields


async def get_all_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.id))
    return list(result.scalars().all())


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def insert_user(db: AsyncSession, new_user: dict[str, Any]) -> User:
    """Insert a new user (password hashed) and return the stored row."""
    fields = _with_hashed_password(new_user)
    user = User(**{k: v for k, v in fields.items() if v is not None})
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user_by_id(db: AsyncSession, user_id: int, fields: dict[str, Any]) -> int:
    result = await db.execute(
        update(User).where(User.id == user_id).values(**_with_hashed_password(fields))
    )
    return result.rowcount


async def delete_user_by_id(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(delete(User).where(User.id == user_id))
    return result.rowcount
