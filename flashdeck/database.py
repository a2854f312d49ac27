"""Database configuration and session management."""

from collections.abc import Generator
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from flashdeck.config import Settings


class Base(DeclarativeBase):
    """Base class for all database models."""


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Turn on foreign key enforcement for every SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _connection_record: Any) -> None:  # noqa: ANN401
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_database_engine(database_url: str) -> Engine:
    """Create an engine with pool settings suited to the backend."""
    if database_url.startswith("sqlite"):
        # An in-memory database lives only as long as its one connection
        pool_options: dict[str, Any] = (
            {"poolclass": StaticPool} if ":memory:" in database_url else {}
        )
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            **pool_options,
        )
        enable_sqlite_foreign_keys(engine)
        return engine

    return create_engine(
        database_url,
        pool_size=20,
        max_overflow=30,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


class Database:
    """Engine and session factory owned by the application instance."""

    def __init__(self, settings: Settings) -> None:
        self.engine = create_database_engine(settings.DATABASE_URL)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def create_tables(self) -> None:
        """Create missing tables (used for SQLite development databases)."""
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Dispose database engine on shutdown."""
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Get the database attached to the running application."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Start the application lifespan first.")
    return database


def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> Generator[Session, None, None]:
    """Get database session."""
    db = database.session_factory()
    try:
        yield db
    finally:
        db.close()


# Type alias for database dependency
DatabaseSession = Annotated[Session, Depends(get_db)]
