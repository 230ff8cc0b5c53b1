"""Mappers between table rows and domain models."""

from typing import Any

from tally.domain.model import Vote
from tally.domain.value import TargetId, TargetType, VoteId, VoterId


def row_to_vote(row: dict[str, Any]) -> Vote:
    """Convert a votes row to a Vote entity."""
    return Vote(
        id=VoteId(row["id"]),
        target_type=TargetType(row["target_type"]),
        target_id=TargetId(row["target_id"]),
        voter_id=VoterId(row["voter_id"]),
        weight=row["weight"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> dict[str, Any]:
    """Convert a Vote entity to insert values."""
    return {
        "id": vote.id,
        "target_type": vote.target_type.value,
        "target_id": vote.target_id,
        "voter_id": vote.voter_id,
        "weight": vote.weight,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }
