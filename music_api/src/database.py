"""
SQLAlchemy engine and session management.

Provides:
- Engine initialization and disposal (called from the application lifespan)
- Request-scoped sessions that commit on success and roll back on error
- Schema creation for development and tests
"""

import structlog
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from music_api.src.config import Settings
from music_api.src.models.catalog import Base

logger = structlog.get_logger(__name__)


_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores REFERENCES clauses unless the pragma is set per
    connection.
    """

    @event.listens_for(engine, "connect")
    def set_foreign_keys_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_engine(settings: Settings) -> Engine:
    """
    Initialize the database engine and session factory.

    Should be called during application startup. The engine is a
    process-wide singleton: while it is alive, later calls return it
    unchanged and only warn when asked for a different database.

    SQLite URLs get a thread-shareable connection with foreign keys
    enforced; in-memory SQLite keeps a single connection so every
    session sees the same database.

    Args:
        settings: Application settings

    Returns:
        SQLAlchemy engine
    """
    global _engine, _session_factory

    if _engine is not None:
        if _engine.url.render_as_string(hide_password=False) != settings.database_url:
            logger.warning(
                "database_engine_reused",
                active=_engine.url.render_as_string(),
                requested=settings.database_url.split("@")[-1]
            )
        return _engine

    if settings.is_sqlite:
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in settings.database_url or settings.database_url == "sqlite://":
            options["poolclass"] = StaticPool
    else:
        options = {
            "pool_size": settings.database_pool_size,
            "max_overflow": settings.database_max_overflow,
            "pool_timeout": settings.database_pool_timeout,
            "pool_pre_ping": settings.database_pool_pre_ping,
        }

    try:
        _engine = create_engine(
            settings.database_url,
            echo=settings.database_echo,
            **options
        )
        if settings.is_sqlite:
            enable_sqlite_foreign_keys(_engine)

        _session_factory = sessionmaker(
            bind=_engine,
            autoflush=False,
            expire_on_commit=False
        )

        logger.info(
            "database_engine_initialized",
            database=settings.database_url.split("@")[-1],
            dialect=_engine.dialect.name
        )

        return _engine

    except Exception as e:
        logger.error("database_engine_init_failed", error=str(e))
        raise


def dispose_engine():
    """
    Dispose the database engine.

    Should be called during application shutdown.
    """
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        logger.info("database_engine_disposed")
        _engine = None
        _session_factory = None


def get_engine() -> Engine:
    """
    Get the database engine.

    Raises:
        RuntimeError: If the engine is not initialized
    """
    if _engine is None:
        logger.error("database_engine_not_initialized")
        raise RuntimeError(
            "Database engine not initialized. Call init_engine() during startup."
        )
    return _engine


def create_schema():
    """Create all catalog tables that do not exist yet."""
    engine = get_engine()
    Base.metadata.create_all(engine)
    logger.info("database_schema_created", tables=sorted(Base.metadata.tables))


def ping() -> bool:
    """
    Run a trivial query against the database.

    Returns:
        True if the database answered
    """
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


def get_session() -> Generator[Session, None, None]:
    """
    Get a request-scoped database session.

    FastAPI dependency. Commits when the request handler returns,
    rolls back if it raises and always closes the session.

    Yields:
        Database session
    """
    if _session_factory is None:
        get_engine()

    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.debug("database_session_rolled_back", error=str(e))
        raise
    finally:
        session.close()
