"""Results of vote transitions and reads."""

from tally.domain.model.common import DomainModel
from tally.domain.value import TargetId, TargetType, VoteOperation, VoteState


class VoteOutcome(DomainModel):
    """Result of applying a vote transition.

    When ``partial`` is set the ledger committed but the cached score did
    not; ``score`` is then the optimistic value the client should render
    until reconciliation settles the stored one.
    """

    target_type: TargetType
    target_id: TargetId
    state: VoteState
    score: int
    operation: VoteOperation
    partial: bool = False


class VoteView(DomainModel):
    """Cached score of a target plus the viewing voter's state."""

    score: int
    voter_state: VoteState | None = None  # None when no voter is known
