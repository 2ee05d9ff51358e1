# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from itertools import count

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from nicolas_qui_paie.core.security import create_access_token
from nicolas_qui_paie.db.session import Base, enable_sqlite_foreign_keys
from nicolas_qui_paie.db.session import get_session as app_get_session
from nicolas_qui_paie.main import app as fastapi_app
from nicolas_qui_paie.models import Category, Proposal, ProposalStatus, User
from nicolas_qui_paie.repositories.unit_of_work import UnitOfWork
from nicolas_qui_paie.services.contribution import level_for
from nicolas_qui_paie.services.voting import VotingService

TEST_DB_URL = "sqlite+aiosqlite://"

_EMAIL_COUNTER = count(1)


@pytest_asyncio.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture()
def app(db_session: AsyncSession) -> Iterator[FastAPI]:
    async def _get_session_override() -> AsyncIterator[AsyncSession]:
        yield db_session

    fastapi_app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(app_get_session, None)


@pytest_asyncio.fixture()
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def voting_service(db_session: AsyncSession) -> VotingService:
    return VotingService(UnitOfWork(db_session))


@pytest.fixture()
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Return a factory persisting users with a given reputation."""

    async def _make_user(display_name: str = "Nicolas", reputation_score: int = 0) -> User:
        user = User(
            display_name=display_name,
            email=f"nicolas{next(_EMAIL_COUNTER)}@example.org",
            reputation_score=reputation_score,
            contribution_level=level_for(reputation_score),
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest_asyncio.fixture()
async def test_user(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create and return a persisted test user."""
    return await make_user("Test User")


@pytest_asyncio.fixture()
async def other_user(make_user: Callable[..., Awaitable[User]]) -> User:
    """Create and return a second persisted user."""
    return await make_user("Other User")


@pytest_asyncio.fixture()
async def category(db_session: AsyncSession) -> Category:
    category = Category(name="Fiscalité", description="Impôts et taxes", sort_order=1)
    db_session.add(category)
    await db_session.commit()
    return category


@pytest.fixture()
def make_proposal(
    db_session: AsyncSession, test_user: User, category: Category
) -> Callable[..., Awaitable[Proposal]]:
    """Return a factory persisting active proposals authored by ``test_user``."""

    async def _make_proposal(
        title: str = "Baisser la TVA sur l'énergie",
        *,
        votes_for: int = 0,
        votes_against: int = 0,
        status: ProposalStatus = ProposalStatus.ACTIVE,
    ) -> Proposal:
        proposal = Proposal(
            title=title,
            description="Une proposition détaillée pour les Nicolas.",
            status=status,
            votes_for=votes_for,
            votes_against=votes_against,
            created_by_id=test_user.id,
            category_id=category.id,
        )
        db_session.add(proposal)
        await db_session.commit()
        return proposal

    return _make_proposal


@pytest_asyncio.fixture()
async def proposal(make_proposal: Callable[..., Awaitable[Proposal]]) -> Proposal:
    """Create a baseline active proposal."""
    return await make_proposal()


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}
