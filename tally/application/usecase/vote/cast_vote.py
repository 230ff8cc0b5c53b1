"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.domain.error import UnauthenticatedError
from tally.domain.service import VoteService, parse_target_id
from tally.domain.value import TargetType, VoteOperation, VoterId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    target_type: str  # "topic" or "post", validated by the vote service
    target_id: str  # UUID string
    vote_type: int | None  # 1, -1, or None to clear
    voter_id: str | None = None  # Voter ID from authenticated user


class CastVoteResponse(CamelModel):
    """Cast vote response."""

    vote_type: int | None
    vote_score: int
    operation: VoteOperation
    partial: bool
    target_type: TargetType
    target_id: str


class CastVoteUseCase(BaseUseCase):
    """Use case for applying a voter's up, down or clear request."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The voter's resulting vote and the target's score. ``partial`` is
            set when the vote was recorded but the score cache lagged behind.

        Raises:
            UnauthenticatedError: If no voter was resolved
            InvalidArgumentError: If the target or weight is malformed
            NotFoundError: If the target does not exist
            ConflictError: If concurrent requests kept colliding
            StoreUnavailableError: If the store failed or timed out
        """
        if request.voter_id is None:
            raise UnauthenticatedError()

        outcome = await self.vote_service.apply_vote(
            target_type=request.target_type,
            target_id=parse_target_id(request.target_id),
            voter_id=VoterId(UUID(request.voter_id)),
            requested=request.vote_type,
        )

        return CastVoteResponse(
            vote_type=outcome.state.as_weight(),
            vote_score=outcome.score,
            operation=outcome.operation,
            partial=outcome.partial,
            target_type=outcome.target_type,
            target_id=str(outcome.target_id),
        )
