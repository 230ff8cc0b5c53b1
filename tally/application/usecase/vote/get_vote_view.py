"""Get vote view use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.domain.service import VoteService, parse_target_id
from tally.domain.value import VoterId


class GetVoteViewRequest(BaseModel):
    """Get vote view request."""

    target_type: str
    target_id: str  # UUID string
    voter_id: str | None = None  # Anonymous readers get no vote state


class GetVoteViewResponse(CamelModel):
    """Get vote view response."""

    vote_score: int
    vote_type: int | None


class GetVoteViewUseCase(BaseUseCase):
    """Use case for reading a target's score and the viewer's vote."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteViewRequest) -> GetVoteViewResponse:
        """Read the cached score; drift is left for reconciliation to repair.

        Raises:
            InvalidArgumentError: If the target is malformed
            NotFoundError: If the target does not exist
        """
        voter_id = VoterId(UUID(request.voter_id)) if request.voter_id else None
        view = await self.vote_service.get_vote_view(
            target_type=request.target_type,
            target_id=parse_target_id(request.target_id),
            voter_id=voter_id,
        )

        return GetVoteViewResponse(
            vote_score=view.score,
            vote_type=(
                view.voter_state.as_weight()
                if view.voter_state is not None
                else None
            ),
        )
