"""In-memory repository implementations for testing."""

from .store import InMemoryStore
from .target import InMemoryTargetRepository
from .unit_of_work import InMemoryUnitOfWork, InMemoryUnitOfWorkFactory
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryStore",
    "InMemoryTargetRepository",
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
    "InMemoryVoteRepository",
]
