"""Async engine and per-request session management."""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

engine: AsyncEngine | None = None
SessionLocal: async_sessionmaker | None = None


async def init_db(database_url: str) -> AsyncEngine:
    """Create the engine and session factory, then create missing tables."""
    global engine, SessionLocal
    from app import models  # noqa: F401

    engine = create_async_engine(database_url, echo=False)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def dispose_db() -> None:
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    if SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    async with SessionLocal() as db:
        yield db
