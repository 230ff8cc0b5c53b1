"""In-memory vote repository for testing."""

import asyncio
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from tally.domain.model.vote import Vote
from tally.domain.repository.vote import LedgerTally, VoteRepository
from tally.domain.value import TargetId, TargetType, VoteId, VoterId

from .store import InMemoryStore, UndoLog


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Reads take their snapshot and then yield to the event loop, the way a
    network round trip returns data that may already be stale, so concurrent
    transitions interleave between reading and writing.
    """

    def __init__(self, store: InMemoryStore, undo_log: UndoLog) -> None:
        self._store = store
        self._undo = undo_log

    async def find_by_target_and_voter(
        self,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a voter's vote on a specific target."""
        vote = self._store.find_vote(target_type, target_id, voter_id)
        await asyncio.sleep(0)
        return vote

    async def find_by_voter_and_targets(
        self,
        voter_id: VoterId,
        target_type: TargetType,
        target_ids: Sequence[TargetId],
    ) -> list[Vote]:
        """Find a voter's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        votes = [
            v
            for v in self._store.votes.values()
            if v.voter_id == voter_id
            and v.target_type == target_type
            and v.target_id in wanted
        ]
        await asyncio.sleep(0)
        return votes

    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Raises:
            IntegrityError: If the voter already has a vote on the target
        """
        if self._store.find_vote(vote.target_type, vote.target_id, vote.voter_id):
            raise IntegrityError("Duplicate vote", None, Exception())

        self._store.votes[vote.id] = vote
        self._undo.append(lambda: self._store.votes.pop(vote.id, None))
        return vote

    async def update_weight(
        self, vote_id: VoteId, expected_weight: int, new_weight: int
    ) -> bool:
        """Flip a vote's weight if it still holds the expected weight."""
        existing = self._store.votes.get(vote_id)
        if existing is None or existing.weight != expected_weight:
            return False

        self._store.votes[vote_id] = existing.model_copy(
            update={"weight": new_weight, "updated_at": datetime.now()}
        )
        self._undo.append(lambda: self._store.votes.__setitem__(vote_id, existing))
        return True

    async def delete(self, vote_id: VoteId, expected_weight: int) -> bool:
        """Delete a vote if it still holds the expected weight."""
        existing = self._store.votes.get(vote_id)
        if existing is None or existing.weight != expected_weight:
            return False

        del self._store.votes[vote_id]
        self._undo.append(lambda: self._store.votes.__setitem__(vote_id, existing))
        return True

    async def tally(self, target_type: TargetType, target_id: TargetId) -> LedgerTally:
        """Sum the weights and count the votes of a target."""
        weights = [
            v.weight
            for v in self._store.votes.values()
            if v.target_type == target_type and v.target_id == target_id
        ]
        return LedgerTally(score=sum(weights), vote_count=len(weights))
