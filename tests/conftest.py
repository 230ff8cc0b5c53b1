"""Test configuration and fixtures."""

import os
from uuid import UUID, uuid4

import logfire

# Settings are read from the environment when containers are built
ADMIN_VOTER_ID = UUID("5d0c9a1e-7f3b-4c62-9e8a-1b2c3d4e5f60")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("ADMIN__VOTER_IDS", f'["{ADMIN_VOTER_ID}"]')

from tally.domain.model import VotableTarget  # noqa: E402
from tally.domain.value import TargetId, TargetType  # noqa: E402
from tally.persistence.repository.inmemory import InMemoryStore  # noqa: E402

# Spans and logs stay local during tests
logfire.configure(send_to_logfire=False, console=False)


def add_target(
    store: InMemoryStore,
    target_type: TargetType = TargetType.TOPIC,
    score: int = 0,
) -> TargetId:
    """Register a fresh topic or post in the store, as the forum would.

    Args:
        store: In-memory store to seed
        target_type: topic or post
        score: Initial cached score

    Returns:
        The new target's ID
    """
    target_id = TargetId(uuid4())
    store.add_target(VotableTarget(id=target_id, target_type=target_type, score=score))
    return target_id
