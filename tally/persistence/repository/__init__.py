"""PostgreSQL repository implementations."""

from tally.persistence.repository.target import PostgresTargetRepository
from tally.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresTargetRepository",
    "PostgresVoteRepository",
]
