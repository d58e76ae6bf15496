from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from cadence.core.config import settings

engine: AsyncEngine | None = None
SessionLocal: sessionmaker | None = None


def init_engine(dsn: str | None = None) -> None:
    global engine, SessionLocal  # noqa: PLW0603
    if engine:
        return
    engine = create_async_engine(dsn or settings.database_dsn, echo=False, future=True)
    SessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all() -> None:
    """Create tables directly, for tests and throwaway sqlite files."""
    from cadence.db.base import Base
    from cadence.db import models  # noqa: F401

    if engine is None:
        init_engine()
    assert engine is not None  # for type checkers
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global engine, SessionLocal  # noqa: PLW0603
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    if SessionLocal is None:
        init_engine()
    assert SessionLocal is not None  # for type checkers
    async with SessionLocal() as session:
        yield session
