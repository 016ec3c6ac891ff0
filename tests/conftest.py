"""
Shared pytest fixtures for the music catalog tests.

Provides:
- Test settings backed by an in-memory SQLite database
- A standalone SQLAlchemy session with the catalog schema
- A FastAPI test client running the full application lifespan
"""

import pytest
from typing import Generator

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from music_api.src import database
from music_api.src.config import Settings, clear_settings_cache
from music_api.src.main import create_app
from music_api.src.models.catalog import Base


# ============================================================================
# CONFIGURATION
# ============================================================================


TEST_ALBUMS_URL = "http://albums.test"


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an isolated in-memory catalog."""
    return Settings(
        environment="test",
        database_url="sqlite://",
        database_create_schema=True,
        album_client_base_url=TEST_ALBUMS_URL,
        album_client_timeout=2.0,
        log_level="WARNING",
        log_format="text",
    )


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None, None, None]:
    """Drop the module level engine and cached settings around each test."""
    database.dispose_engine()
    clear_settings_cache()
    yield
    database.dispose_engine()
    clear_settings_cache()


# ============================================================================
# DATABASE
# ============================================================================


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Session on a private in-memory database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


# ============================================================================
# APPLICATION
# ============================================================================


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application wired to the test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client; entering it runs startup and shutdown."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
