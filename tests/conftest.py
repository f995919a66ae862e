"""
Test infrastructure for the Blogful API.

Strategy
--------
- SQLite in-memory via aiosqlite, so no Postgres instance is needed.
- StaticPool makes every session share the one in-memory connection;
  SQLite in-memory databases are connection-scoped.
- The app's get_db dependency is overridden so every request uses the test
  session factory.
- All tables are created before each test and dropped after it.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from blogful.config import settings
from blogful.database import Base, get_db
from blogful.main import app
from blogful.middleware import install_query_counter

# Full-strength PBKDF2 costs ~0.5s per hash; the format is what tests check.
settings.PASSWORD_HASH_ITERATIONS = 1_000

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override: replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that call the services directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """An httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_article():
    def _make(**overrides) -> dict:
        article = {
            "title": "First test post!",
            "style": "How-to",
            "content": "Lorem ipsum dolor sit amet, consectetur adipisicing elit.",
        }
        article.update(overrides)
        return article
    return _make


@pytest.fixture
def make_user():
    def _make(**overrides) -> dict:
        user = {
            "fullname": "Sam Gamgee",
            "username": "sam.gamgee@shire.com",
            "nickname": "Sam",
            "password": "secret",
        }
        user.update(overrides)
        return user
    return _make


@pytest.fixture
def malicious_text() -> str:
    return 'Naughty naughty very naughty <script>alert("xss");</script>'


@pytest.fixture
def malicious_html() -> str:
    return (
        'Bad image <img src="https://url.to.file.which/does-not.exist" '
        'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
    )
