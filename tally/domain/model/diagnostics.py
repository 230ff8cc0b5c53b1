"""Diagnostic snapshots of ledger and cache state."""

from tally.domain.model.common import DomainModel
from tally.domain.value import TargetId, TargetType


class TargetInspection(DomainModel):
    """Cached score next to the ledger tally for one target."""

    target_type: TargetType
    target_id: TargetId
    cached_score: int
    ledger_score: int
    vote_count: int

    @property
    def drift(self) -> int:
        return self.cached_score - self.ledger_score

    @property
    def is_consistent(self) -> bool:
        return self.drift == 0


class LedgerProbe(DomainModel):
    """Outcome of a rolled-back read/write probe against the ledger."""

    can_read: bool
    can_write: bool
    read_error: str | None = None
    write_error: str | None = None
