"""Shared state for the in-memory repositories."""

from typing import Callable, Optional

from tally.domain.model import VotableTarget, Vote
from tally.domain.value import TargetId, TargetType, VoteId, VoterId

# Inverse operations recorded by a unit of work, applied in reverse on rollback
UndoLog = list[Callable[[], None]]


class InMemoryStore:
    """Ledger rows and cached scores shared by every in-memory unit of work.

    One store stands in for one database; repositories are cheap views
    bound to a unit of work's undo log.
    """

    def __init__(self) -> None:
        self.votes: dict[VoteId, Vote] = {}
        self.scores: dict[tuple[TargetType, TargetId], int] = {}

    def add_target(self, target: VotableTarget) -> VotableTarget:
        """Register a topic or post, as the forum would when it is created."""
        self.scores[(target.target_type, target.id)] = target.score
        return target

    def set_score(self, target_type: TargetType, target_id: TargetId, score: int) -> None:
        """Overwrite a cached score out-of-band, bypassing the engine."""
        self.scores[(target_type, target_id)] = score

    def find_vote(
        self, target_type: TargetType, target_id: TargetId, voter_id: VoterId
    ) -> Optional[Vote]:
        for vote in self.votes.values():
            if (
                vote.target_type == target_type
                and vote.target_id == target_id
                and vote.voter_id == voter_id
            ):
                return vote
        return None
