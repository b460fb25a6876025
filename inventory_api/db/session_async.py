# inventory_api/db/session_async.py
"""Async SQLAlchemy engine and session utilities."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from inventory_api.core.config import Settings
from inventory_api.db.base import Base

T = TypeVar("T")


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.ASYNC_DATABASE_URL, echo=settings.DB_ECHO)

    async def create_all(self) -> None:
        """Create tables for every registered model."""
        import inventory_api.models.inventory  # noqa: F401
        import inventory_api.models.product  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def run_in_transaction(
        self,
        operation: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """Execute an async operation within a managed transaction."""
        async with self.session_factory() as session:
            try:
                result = await operation(session)
                await session.commit()
                return result
            except Exception:
                await session.rollback()
                raise


async def get_async_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an AsyncSession from the app's database."""
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        yield session
