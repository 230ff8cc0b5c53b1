"""Vote ledger repository interface."""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Sequence

from tally.domain.model.vote import Vote
from tally.domain.value import TargetId, TargetType, VoteId, VoterId


class LedgerTally(NamedTuple):
    """Aggregate of a target's ledger rows."""

    score: int
    vote_count: int


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_target_and_voter(
        self,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target.

        Args:
            target_type: Type of target (topic or post)
            target_id: ID of the target
            voter_id: The voter's ID
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_voter_and_targets(
        self,
        voter_id: VoterId,
        target_type: TargetType,
        target_ids: Sequence[TargetId],
    ) -> List[Vote]:
        """Find a voter's votes on multiple targets (batch query).

        Args:
            voter_id: The voter's ID
            target_type: Type of the targets
            target_ids: Target IDs to check

        Returns:
            Votes by the voter on the specified targets
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to insert

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the voter already has a vote on the target
        """
        pass

    @abstractmethod
    async def update_weight(
        self, vote_id: VoteId, expected_weight: int, new_weight: int
    ) -> bool:
        """Flip a vote's weight if it still holds the expected weight.

        Args:
            vote_id: The vote to update
            expected_weight: Weight observed when the transition was planned
            new_weight: Weight to store

        Returns:
            True if the row was updated, False if it changed or vanished
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId, expected_weight: int) -> bool:
        """Delete a vote if it still holds the expected weight.

        Returns:
            True if the row was deleted, False if it changed or vanished
        """
        pass

    @abstractmethod
    async def tally(self, target_type: TargetType, target_id: TargetId) -> LedgerTally:
        """Sum the weights and count the votes of a target."""
        pass
