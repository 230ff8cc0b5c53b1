"""In-memory score cache repository for testing."""

import asyncio
from typing import Optional

from tally.domain.error import NotFoundError
from tally.domain.repository.target import TargetRepository
from tally.domain.value import TargetId, TargetType

from .store import InMemoryStore, UndoLog


class InMemoryTargetRepository(TargetRepository):
    """In-memory implementation of TargetRepository for testing.

    Score writes record their inverse as a delta, so rolling back one unit
    of work never clobbers increments made by another.
    """

    def __init__(self, store: InMemoryStore, undo_log: UndoLog) -> None:
        self._store = store
        self._undo = undo_log

    def _shift(self, key: tuple[TargetType, TargetId], delta: int) -> None:
        self._store.scores[key] += delta

    async def exists(self, target_type: TargetType, target_id: TargetId) -> bool:
        """Check whether a target exists."""
        found = (target_type, target_id) in self._store.scores
        await asyncio.sleep(0)
        return found

    async def get_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        for_update: bool = False,
    ) -> Optional[int]:
        """Read the cached score."""
        score = self._store.scores.get((target_type, target_id))
        await asyncio.sleep(0)
        return score

    async def apply_score_delta(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> int:
        """Add ``delta`` to the cached score without yielding in between."""
        key = (target_type, target_id)
        if key not in self._store.scores:
            raise NotFoundError(target_type.value.capitalize(), str(target_id))

        self._shift(key, delta)
        self._undo.append(lambda: self._shift(key, -delta))
        return self._store.scores[key]

    async def compare_and_set_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        expected: int,
        new: int,
    ) -> bool:
        """Overwrite the cached score only if it still equals ``expected``."""
        key = (target_type, target_id)
        if self._store.scores.get(key) != expected:
            return False

        self._store.scores[key] = new
        self._undo.append(lambda: self._shift(key, expected - new))
        return True

    async def list_ids(self, target_type: TargetType) -> list[TargetId]:
        """List the IDs of every target of a type."""
        return sorted(
            (tid for (ttype, tid) in self._store.scores if ttype == target_type),
            key=str,
        )
