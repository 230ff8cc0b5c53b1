"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request
from fastapi.exceptions import RequestValidationError
from pydantic import StrictInt, ValidationError

from tally.application.usecase.base import CamelModel
from tally.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteViewRequest,
    GetVoteViewResponse,
    GetVoteViewUseCase,
)
from tally.domain.error import UnauthenticatedError
from tally.domain.service import JWTService
from tally.interface.api.envelope import Envelope, ok

router = APIRouter(prefix="/v2/vote", tags=["votes"], route_class=DishkaRoute)


class CastVoteBody(CamelModel):
    """Body of a vote request.

    ``voteType`` must be present; null clears the vote.
    """

    target_type: str
    target_id: str
    vote_type: StrictInt | None


@router.post(
    "",
    response_model=Envelope[CastVoteResponse],
    # The body is parsed by hand after authentication; keep it documented
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": CastVoteBody.model_json_schema(by_alias=True)
                }
            },
        }
    },
)
async def cast_vote(
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[CastVoteResponse]:
    """Upvote, downvote, or clear a vote on a topic or post.

    Voting the same way twice retracts the vote; voting the other way flips
    it. Requires authentication, which is checked before the body is.

    Args:
        request: Raw request carrying a CastVoteBody
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The voter's vote and the target's score; ``partial`` means the score
        shown is optimistic until the next reconciliation pass

    Raises:
        UnauthenticatedError: If the cookie does not resolve to a voter
        RequestValidationError: If the body is not a valid CastVoteBody
    """
    voter_id = jwt_service.get_voter_id_from_token(auth_token)
    if voter_id is None:
        raise UnauthenticatedError()

    try:
        body = CastVoteBody.model_validate_json(await request.body())
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    cast_request = CastVoteRequest(
        target_type=body.target_type,
        target_id=body.target_id,
        vote_type=body.vote_type,
        voter_id=str(voter_id),
    )
    return ok(await cast_vote_use_case.execute(cast_request))


@router.get(
    "/{target_type}/{target_id}", response_model=Envelope[GetVoteViewResponse]
)
async def get_vote_view(
    target_type: str,
    target_id: str,
    get_vote_view_use_case: FromDishka[GetVoteViewUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[GetVoteViewResponse]:
    """Get a target's score and, if authenticated, the caller's vote.

    Args:
        target_type: topic or post
        target_id: Target UUID
        get_vote_view_use_case: Get vote view use case from DI
        jwt_service: JWT service for optional authentication (injected)
        auth_token: Optional JWT token from cookie
    """
    voter_id = jwt_service.get_voter_id_from_token(auth_token)

    request = GetVoteViewRequest(
        target_type=target_type,
        target_id=target_id,
        voter_id=str(voter_id) if voter_id else None,
    )
    return ok(await get_vote_view_use_case.execute(request))
