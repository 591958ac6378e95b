"""
Pytest configuration and shared fixtures for backend tests.
"""

import logging
import os
import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Deterministic settings: no real AI calls, in-memory rate limits
os.environ["ENVIRONMENT"] = "test"
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"
os.environ.pop("REDIS_URL", None)

import pytest
from typing import AsyncGenerator
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from infrastructure.database.models import Base
from infrastructure.database.connection import get_db
from infrastructure.config import get_settings
from infrastructure.logging_config import RequestLoggerAdapter
from core.security import TokenService
from services.context import RequestContext

settings = get_settings()
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
)


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_id() -> str:
    """Provider user ID of the authenticated test caller."""
    return f"user_{uuid4().hex[:12]}"


@pytest.fixture
def other_user_id() -> str:
    return f"user_{uuid4().hex[:12]}"


@pytest.fixture
def auth_headers(user_id: str) -> dict:
    """Generate authentication headers for the test user."""
    access_token = token_service.create_access_token(user_id=user_id)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def other_auth_headers(other_user_id: str) -> dict:
    """Authentication headers for a second, unrelated user."""
    access_token = token_service.create_access_token(user_id=other_user_id)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def make_context(db_session: AsyncSession):
    """Factory for service-level RequestContext objects."""

    def _make(user_id: str = "user_test") -> RequestContext:
        request_id = str(uuid4())
        return RequestContext(
            user_id=user_id,
            request_id=request_id,
            db=db_session,
            settings=settings,
            logger=RequestLoggerAdapter(
                logging.getLogger("tests"),
                {"request_id": request_id, "user_id": user_id},
            ),
        )

    return _make


@pytest.fixture
def ctx(make_context, user_id: str) -> RequestContext:
    return make_context(user_id)


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    # Reset rate limiter state between tests to prevent cross-test 429s
    if hasattr(app.state, "limiter"):
        app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Style guide fixtures
# ============================================================================


@pytest.fixture
def style_guide_payload() -> dict:
    """Onboarding form data as the frontend sends it."""
    return {
        "brandName": "Brandwrite",
        "brandDescription": "AI 블로그 글쓰기 도우미",
        "personality": ["친근함", "전문성"],
        "formality": "neutral",
        "targetAudience": "1인 마케터",
        "painPoints": "블로그 글을 꾸준히 쓸 시간이 없다",
        "language": "ko",
        "tone": "friendly",
        "contentLength": "medium",
        "readingLevel": "intermediate",
    }
