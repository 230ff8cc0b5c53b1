"""Votable target entity."""

from tally.domain.model.common import DomainModel
from tally.domain.value import TargetId, TargetType


class VotableTarget(DomainModel):
    """A topic or post as seen by the vote engine.

    The content itself belongs to the forum; the engine only reads and
    writes the cached score.
    """

    id: TargetId
    target_type: TargetType
    score: int = 0
