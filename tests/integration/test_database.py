"""
Integration tests for engine and session management.
"""

import pytest

from sqlalchemy import func, select

from music_api.src import database
from music_api.src.models.catalog import Style


@pytest.fixture
def engine(test_settings):
    engine = database.init_engine(test_settings)
    database.create_schema()
    return engine


class TestEngineLifecycle:
    """Test engine initialization and disposal."""

    def test_get_engine_before_init(self):
        with pytest.raises(RuntimeError):
            database.get_engine()

    def test_init_is_idempotent(self, engine, test_settings):
        assert database.init_engine(test_settings) is engine
        assert database.get_engine() is engine

    def test_dispose(self, engine):
        database.dispose_engine()

        with pytest.raises(RuntimeError):
            database.get_engine()

    def test_ping(self, engine):
        assert database.ping() is True

    def test_sqlite_foreign_keys_enforced(self, engine):
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1

    def test_reinit_keeps_active_engine(self, engine, test_settings):
        """The engine is process wide; other settings do not replace it."""
        other = test_settings.model_copy(update={"database_url": "sqlite:///other.db"})

        assert database.init_engine(other) is engine
        assert database.get_engine().url.render_as_string() == "sqlite://"


class TestRequestSession:
    """Test the request-scoped session generator."""

    def count_styles(self) -> int:
        session = next(database.get_session())
        try:
            return session.scalar(select(func.count()).select_from(Style))
        finally:
            session.close()

    def test_commits_on_success(self, engine):
        sessions = database.get_session()
        session = next(sessions)
        session.add(Style(name="Rock"))

        with pytest.raises(StopIteration):
            next(sessions)

        assert self.count_styles() == 1

    def test_rolls_back_on_error(self, engine):
        sessions = database.get_session()
        session = next(sessions)
        session.add(Style(name="Rock"))

        with pytest.raises(ValueError):
            sessions.throw(ValueError("handler failed"))

        assert self.count_styles() == 0
