"""SQLAlchemy adapter – SqlAlchemySessionFactory and shared query runner."""
from __future__ import annotations

import asyncio
import contextlib
from typing import Any, AsyncIterator, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from logscope.kernel.errors import QueryTimeoutError, StoreUnavailableError


class SqlAlchemySessionFactory:
    """Creates async SQLAlchemy sessions from an engine URL."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def engine(self) -> Any:
        return self._engine

    def __call__(self) -> AsyncSession:
        return self._session_factory()

    async def dispose(self) -> None:
        await self._engine.dispose()


SessionFactory = Callable[[], AsyncSession]


class SqlAlchemyQueryRunner:
    """Runs read statements in a short-lived session.

    Driver and pool failures surface as :class:`StoreUnavailableError`,
    deadline overruns as :class:`QueryTimeoutError`.  Nothing is retried.
    """

    def __init__(self, store_name: str, session_factory: SessionFactory, timeout: float | None = None) -> None:
        self._store_name = store_name
        self._session_factory = session_factory
        self._timeout = timeout

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailableError(
                self._store_name,
                f"Query against '{self._store_name}' failed: {exc.__class__.__name__}",
                cause=exc,
            ) from exc

    async def fetch(self, statement: Any, consume: Callable[[Any], Any]) -> Any:
        """Execute *statement* and apply *consume* to the result inside the session."""
        async with self.session() as session:
            try:
                result = await asyncio.wait_for(session.execute(statement), self._timeout)
            except asyncio.TimeoutError as exc:
                raise QueryTimeoutError(
                    f"Query against '{self._store_name}' exceeded {self._timeout}s",
                    detail={"store": self._store_name, "timeout": self._timeout},
                    cause=exc,
                ) from exc
            return consume(result)

    async def rows(self, statement: Any) -> list[Any]:
        return await self.fetch(statement, lambda result: list(result.all()))

    async def scalars(self, statement: Any) -> list[Any]:
        return await self.fetch(statement, lambda result: list(result.scalars().all()))

    async def scalar(self, statement: Any) -> Any:
        return await self.fetch(statement, lambda result: result.scalar_one())


__all__ = ["SessionFactory", "SqlAlchemyQueryRunner", "SqlAlchemySessionFactory"]
