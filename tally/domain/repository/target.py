"""Votable target (score cache) repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from tally.domain.value import TargetId, TargetType


class TargetRepository(ABC):
    """Access to the cached score column of topics and posts.

    Targets are created and deleted by the content subsystem; this
    repository never touches anything but their score.
    """

    @abstractmethod
    async def exists(self, target_type: TargetType, target_id: TargetId) -> bool:
        """Check whether a target exists."""
        pass

    @abstractmethod
    async def get_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        for_update: bool = False,
    ) -> Optional[int]:
        """Read the cached score.

        Args:
            target_type: Type of target (topic or post)
            target_id: ID of the target
            for_update: Lock the target row until the surrounding transaction
                ends; a vote transition touching the same row waits for it

        Returns:
            The cached score, or None if the target does not exist
        """
        pass

    @abstractmethod
    async def apply_score_delta(
        self, target_type: TargetType, target_id: TargetId, delta: int
    ) -> int:
        """Atomically add ``delta`` to the cached score.

        Concurrent callers never lose each other's updates.

        Returns:
            The score after the update
        """
        pass

    @abstractmethod
    async def compare_and_set_score(
        self,
        target_type: TargetType,
        target_id: TargetId,
        expected: int,
        new: int,
    ) -> bool:
        """Overwrite the cached score only if it still equals ``expected``.

        Returns:
            True if the score was written, False if it had changed
        """
        pass

    @abstractmethod
    async def list_ids(self, target_type: TargetType) -> List[TargetId]:
        """List the IDs of every target of a type."""
        pass
