"""Unit of work interface.

A unit of work is one database transaction. Repositories obtained from it
share that transaction: leaving the ``async with`` block normally commits,
leaving it with an exception rolls back.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import Optional, Type

from tally.domain.repository.target import TargetRepository
from tally.domain.repository.vote import VoteRepository


class UnitOfWork(ABC):
    """Transaction boundary around the ledger and the score cache."""

    votes: VoteRepository
    targets: TargetRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.close()

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every change made in the transaction.

        Calling commit afterwards is a no-op.
        """
        pass

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Nested transaction.

        An exception raised inside the block undoes only the changes made
        inside it and then propagates; the outer transaction stays usable.
        """
        pass

    async def close(self) -> None:
        """Release resources held by the unit of work."""
        pass


class UnitOfWorkFactory(ABC):
    """Opens a fresh unit of work per call."""

    @abstractmethod
    def __call__(self) -> UnitOfWork:
        pass
