"""Vote entity.

A vote is one row of the ledger, the source of truth for every score.
Each voter holds at most one vote per target.
"""

from datetime import datetime

from pydantic import Field, field_validator

from tally.domain.model.common import DomainModel
from tally.domain.value import TargetId, TargetType, VoteId, VoterId, VoteState


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per target (enforced by database unique constraint)
    - Weight is +1 or -1; "no vote" is the absence of the row, never weight 0
    - Only the voter's own transitions may change or remove the row
    """

    id: VoteId
    target_type: TargetType
    target_id: TargetId
    voter_id: VoterId
    weight: int
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: int) -> int:
        """Only up and down votes are stored."""
        if v not in (1, -1):
            raise ValueError("Vote weight must be 1 or -1")
        return v

    @property
    def state(self) -> VoteState:
        return VoteState(self.weight)
