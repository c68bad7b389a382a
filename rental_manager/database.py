"""
Engine, session factory and declarative base.
PostgreSQL (asyncpg) in deployment; SQLite (aiosqlite) for local runs and tests.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool
from sqlalchemy import event, text, DateTime, Uuid
from rental_manager.config import settings
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Timezone-aware current time used for record timestamps."""
    return datetime.now(timezone.utc)


def engine_options(database_url: str, debug: bool = False) -> Dict[str, Any]:
    """
    Build engine keyword arguments for the given database URL.

    PostgreSQL gets a tuned connection pool; SQLite (local runs and tests)
    gets a single shared connection for in-memory databases.
    """
    options: Dict[str, Any] = {"echo": debug}

    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=3600,
        pool_timeout=30,
        connect_args={
            "server_settings": {
                "application_name": "rental_manager_api",
            }
        },
    )
    return options


def enable_sqlite_foreign_keys(async_engine) -> None:
    """SQLite leaves foreign keys unenforced unless every connection turns them on."""
    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    settings.database_url,
    **engine_options(settings.database_url, settings.debug)
)

if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base giving every table a UUID key and audit timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        index=True
    )

    # Client-side timestamps: room ordering needs sub-second resolution.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def test_database_connection() -> bool:
    """Run ``SELECT 1``; returns False instead of raising when the database is unreachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
    logger.debug("Database connection successful")
    return True


async def create_tables() -> None:
    """Create missing tables; existing tables are left as they are."""
    # Registers every model on Base.metadata
    import rental_manager.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


async def drop_tables() -> None:
    """Drop every table. Refused in production."""
    if settings.is_production:
        raise RuntimeError("Cannot drop tables in production environment")

    import rental_manager.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


async def close_db_connection() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
