"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_vote_view import (
    GetVoteViewRequest,
    GetVoteViewResponse,
    GetVoteViewUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetVoteViewRequest",
    "GetVoteViewResponse",
    "GetVoteViewUseCase",
]
