"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tally.domain.repository import UnitOfWork, UnitOfWorkFactory

from .store import InMemoryStore, UndoLog
from .target import InMemoryTargetRepository
from .vote import InMemoryVoteRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Applies writes to the store immediately and undoes them on rollback."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._undo: UndoLog = []

    async def __aenter__(self) -> "InMemoryUnitOfWork":
        self._undo = []
        self.votes = InMemoryVoteRepository(self._store, self._undo)
        self.targets = InMemoryTargetRepository(self._store, self._undo)
        return self

    async def commit(self) -> None:
        self._undo.clear()

    async def rollback(self) -> None:
        self._unwind(0)

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        mark = len(self._undo)
        try:
            yield
        except BaseException:
            self._unwind(mark)
            raise

    def _unwind(self, mark: int) -> None:
        while len(self._undo) > mark:
            self._undo.pop()()


class InMemoryUnitOfWorkFactory(UnitOfWorkFactory):
    """Opens units of work over one shared store."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def __call__(self) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(self.store)
