"""Domain model entities for the vote engine."""

from tally.domain.model.diagnostics import LedgerProbe, TargetInspection
from tally.domain.model.outcome import VoteOutcome, VoteView
from tally.domain.model.reconciliation import (
    ReconciliationFailure,
    ReconciliationReport,
    ScoreCorrection,
)
from tally.domain.model.target import VotableTarget
from tally.domain.model.vote import Vote

__all__ = [
    "Vote",
    "VotableTarget",
    "VoteOutcome",
    "VoteView",
    "ScoreCorrection",
    "ReconciliationFailure",
    "ReconciliationReport",
    "TargetInspection",
    "LedgerProbe",
]
