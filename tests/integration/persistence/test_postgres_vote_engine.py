"""Integration tests for the vote engine on PostgreSQL.

Requires a database at DATABASE__URL with migrations applied
(``python scripts/run_migrations.py``). Skipped when it is not set.
"""

import asyncio
import os
from uuid import uuid4

import pytest
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tally.domain.service import DiagnosticsService, ReconciliationService, VoteService
from tally.domain.value import ReconciliationScope, TargetId, TargetType, VoterId
from tally.persistence.tables import TARGET_TABLES, votes_table
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ,
    reason="PostgreSQL integration tests need DATABASE__URL",
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


async def create_target(
    session_factory: async_sessionmaker[AsyncSession],
    target_type: TargetType,
    score: int = 0,
) -> TargetId:
    target_id = TargetId(uuid4())
    table = TARGET_TABLES[target_type]
    async with session_factory() as session:
        await session.execute(insert(table).values(id=target_id, vote_score=score))
        await session.commit()
    return target_id


async def remove_target(
    session_factory: async_sessionmaker[AsyncSession],
    target_type: TargetType,
    target_id: TargetId,
) -> None:
    table = TARGET_TABLES[target_type]
    async with session_factory() as session:
        await session.execute(
            delete(votes_table).where(votes_table.c.target_id == target_id)
        )
        await session.execute(delete(table).where(table.c.id == target_id))
        await session.commit()


async def stored_score(
    session_factory: async_sessionmaker[AsyncSession],
    target_type: TargetType,
    target_id: TargetId,
) -> int:
    table = TARGET_TABLES[target_type]
    async with session_factory() as session:
        result = await session.execute(
            select(table.c.vote_score).where(table.c.id == target_id)
        )
        return result.scalar_one()


class TestPostgresVoteEngine:
    @pytest.mark.asyncio
    async def test_concurrent_voters_and_double_click(self, integration_env):
        # Arrange
        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])
        vote_service = await integration_env.get(VoteService)
        topic_id = await create_target(session_factory, TargetType.TOPIC)
        voters = [VoterId(uuid4()) for _ in range(5)]

        try:
            # Act
            await asyncio.gather(
                *(vote_service.apply_vote("topic", topic_id, v, 1) for v in voters),
                vote_service.apply_vote("topic", topic_id, voters[0], 1),
            )

            # Assert - voters[0] double-clicked, every vote still counts once
            score = await stored_score(session_factory, TargetType.TOPIC, topic_id)
            assert score == 5
        finally:
            await remove_target(session_factory, TargetType.TOPIC, topic_id)

    @pytest.mark.asyncio
    async def test_double_click_retract_applies_once(self, integration_env):
        # Arrange
        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])
        vote_service = await integration_env.get(VoteService)
        topic_id = await create_target(session_factory, TargetType.TOPIC)
        voter_id = VoterId(uuid4())

        try:
            await vote_service.apply_vote("topic", topic_id, voter_id, 1)

            # Act - the second request waits on the row lock, then finds it gone
            outcomes = await asyncio.gather(
                vote_service.apply_vote("topic", topic_id, voter_id, 1),
                vote_service.apply_vote("topic", topic_id, voter_id, 1),
            )

            # Assert
            assert [o.state.name for o in outcomes] == ["NONE", "NONE"]
            assert await stored_score(session_factory, TargetType.TOPIC, topic_id) == 0
            async with session_factory() as session:
                result = await session.execute(
                    select(votes_table.c.id).where(votes_table.c.target_id == topic_id)
                )
                assert result.all() == []
        finally:
            await remove_target(session_factory, TargetType.TOPIC, topic_id)

    @pytest.mark.asyncio
    async def test_reconciliation_repairs_drift(self, integration_env):
        # Arrange
        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])
        vote_service = await integration_env.get(VoteService)
        reconciliation_service = await integration_env.get(ReconciliationService)
        post_id = await create_target(session_factory, TargetType.POST, score=9)

        try:
            await vote_service.apply_vote("post", post_id, VoterId(uuid4()), -1)

            # Act
            scope = ReconciliationScope(target_type=TargetType.POST, target_id=post_id)
            first = await reconciliation_service.reconcile(scope)
            second = await reconciliation_service.reconcile(scope)

            # Assert
            assert first.corrections[0].old_score == 8
            assert first.corrections[0].new_score == -1
            assert second.targets_corrected == 0
        finally:
            await remove_target(session_factory, TargetType.POST, post_id)

    @pytest.mark.asyncio
    async def test_probe_writes_nothing(self, integration_env):
        diagnostics_service = await integration_env.get(DiagnosticsService)

        probe = await diagnostics_service.probe_ledger(VoterId(uuid4()))

        assert probe.can_read and probe.can_write
