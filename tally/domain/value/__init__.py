"""Domain value objects for the vote engine."""

from tally.domain.value.identifiers import TargetId, VoteId, VoterId
from tally.domain.value.transition import (
    SET,
    TOGGLE,
    LedgerWrite,
    Transition,
    TransitionTable,
    resolve,
    resolve_stale,
)
from tally.domain.value.types import (
    ReconciliationScope,
    TargetType,
    VoteOperation,
    VoteState,
)

__all__ = [
    # Identifiers
    "VoteId",
    "VoterId",
    "TargetId",
    # Types
    "TargetType",
    "VoteState",
    "VoteOperation",
    "ReconciliationScope",
    # Transitions
    "LedgerWrite",
    "Transition",
    "TransitionTable",
    "TOGGLE",
    "SET",
    "resolve",
    "resolve_stale",
]
