"""PostgreSQL unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tally.domain.repository import UnitOfWork, UnitOfWorkFactory
from tally.persistence.repository import (
    PostgresTargetRepository,
    PostgresVoteRepository,
)


class PostgresUnitOfWork(UnitOfWork):
    """One AsyncSession transaction shared by the vote and target repositories."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work used outside 'async with'")
        return self._session

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._session = self._session_factory()
        self.votes = PostgresVoteRepository(self._session)
        self.targets = PostgresTargetRepository(self._session)
        return self

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        # begin_nested rolls back to the SAVEPOINT on error and re-raises
        async with self.session.begin_nested():
            yield

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None


class PostgresUnitOfWorkFactory(UnitOfWorkFactory):
    """Opens a PostgresUnitOfWork per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def __call__(self) -> PostgresUnitOfWork:
        return PostgresUnitOfWork(self.session_factory)
