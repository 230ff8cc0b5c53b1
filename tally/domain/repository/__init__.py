"""Repository interfaces for the vote engine.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tally.domain.repository.target import TargetRepository
from tally.domain.repository.unit_of_work import UnitOfWork, UnitOfWorkFactory
from tally.domain.repository.vote import LedgerTally, VoteRepository

__all__ = [
    "LedgerTally",
    "TargetRepository",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "VoteRepository",
]
