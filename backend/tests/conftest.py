"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest
from factories import ALLOWED_EMAIL
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from treasury_bot.database import Base, get_db
from treasury_bot.dependencies.runtime import get_runtime
from treasury_bot.main import app
from treasury_bot.rate_limiter import limiter
from treasury_bot.runtime import BotRuntime
from treasury_bot.services.access import (
    AccessGate,
    AuthorizedUser,
    InMemoryAuthorizationStore,
    InMemoryRecipientRegistry,
)
from treasury_bot.services.notifications import Broadcaster
from treasury_bot.services.telegram import ReportFormatter


@pytest.fixture
def engine():
    """In-memory SQLite engine with the treasury tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Create database session for testing."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def allow_list():
    """Allow-list lookup that knows a single treasury user."""
    users = {ALLOWED_EMAIL: AuthorizedUser(ALLOWED_EMAIL, "admin")}
    return lambda email: users.get(email)


@pytest.fixture
def runtime(allow_list):
    """BotRuntime with in-memory stores and a mocked Telegram client."""
    store = InMemoryAuthorizationStore()
    recipients = InMemoryRecipientRegistry()
    telegram = MagicMock()
    return BotRuntime(
        store=store,
        recipients=recipients,
        gate=AccessGate(store, recipients, allow_list),
        formatter=ReportFormatter(),
        telegram=telegram,
        broadcaster=Broadcaster(telegram, recipients, store),
    )


@pytest.fixture
def client(db, runtime):
    """Test client with database session and runtime overrides."""
    limiter.reset()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_runtime] = lambda: runtime
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
