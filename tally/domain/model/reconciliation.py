"""Reconciliation results."""

from pydantic import Field

from tally.domain.model.common import DomainModel
from tally.domain.value import TargetId, TargetType


class ScoreCorrection(DomainModel):
    """A cached score that was overwritten with the ledger sum."""

    target_type: TargetType
    target_id: TargetId
    old_score: int
    new_score: int

    @property
    def delta(self) -> int:
        return self.new_score - self.old_score


class ReconciliationFailure(DomainModel):
    """A target that could not be reconciled in this pass."""

    target_type: TargetType
    target_id: TargetId
    error: str


class ReconciliationReport(DomainModel):
    """Summary of one reconciliation pass."""

    targets_checked: int = 0
    corrections: list[ScoreCorrection] = Field(default_factory=list)
    errors: list[ReconciliationFailure] = Field(default_factory=list)

    @property
    def targets_corrected(self) -> int:
        return len(self.corrections)
