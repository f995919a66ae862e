import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from blogful.config import settings
from blogful.middleware import install_query_counter

logger = logging.getLogger(__name__)

# The one engine (and connection pool) shared by every request.
# Tests swap in their own engine through the get_db override.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    """Request-scoped session: commit when the handler returns, roll back if it raises."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(drop_first: bool = False) -> None:
    """Create every table on the shared engine (development and seeding only)."""
    import blogful.models  # noqa: F401

    async with engine.begin() as conn:
        if drop_first:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    logger.info(
        "Closing database pool for %s",
        make_url(settings.DATABASE_URL).render_as_string(hide_password=True),
    )
    await engine.dispose()
