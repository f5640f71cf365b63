"""Database connection and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from showsync.config import settings

SessionFactory = async_sessionmaker[AsyncSession]


def create_engine_from_url(database_url: str) -> AsyncEngine:
    """
    Create an async engine with the configured timeouts.

    The per-statement timeout is an asyncpg connect argument, so it is only
    passed for asyncpg URLs.
    """
    connect_args: dict[str, int] = {}
    if database_url.startswith("postgresql+asyncpg"):
        connect_args["command_timeout"] = settings.database_command_timeout

    return create_async_engine(
        database_url,
        echo=False,  # Set to True for SQL query logging
        future=True,
        pool_timeout=settings.database_pool_timeout,
        connect_args=connect_args,
    )


def create_session_factory(bind: AsyncEngine) -> SessionFactory:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Process-wide storage handle; disposed by the application lifespan
engine = create_engine_from_url(settings.database_url)
AsyncSessionLocal = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide database sessions.

    Usage:
        @router.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            # Use db here
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_factory() -> SessionFactory:
    """Dependency providing the session factory to batch jobs."""
    return AsyncSessionLocal
