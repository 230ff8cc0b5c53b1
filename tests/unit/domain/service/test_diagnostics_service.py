"""Unit tests for DiagnosticsService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import ProgrammingError

from tally.domain.error import NotFoundError
from tally.domain.service import DiagnosticsService, VoteService
from tally.domain.value import ReconciliationScope, TargetId, TargetType, VoterId
from tally.persistence.repository.inmemory import InMemoryStore, InMemoryVoteRepository
from tests.conftest import add_target
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestInspectTarget:
    @pytest.mark.asyncio
    async def test_reports_cache_ledger_and_drift(self, unit_env):
        # Arrange
        diagnostics_service = await unit_env.get(DiagnosticsService)
        vote_service = await unit_env.get(VoteService)
        store = await unit_env.get(InMemoryStore)
        post_id = add_target(store, TargetType.POST)
        for weight in (1, 1, -1):
            await vote_service.apply_vote("post", post_id, VoterId(uuid4()), weight)
        store.set_score(TargetType.POST, post_id, 4)

        # Act
        inspection = await diagnostics_service.inspect_target(TargetType.POST, post_id)

        # Assert
        assert inspection.cached_score == 4
        assert inspection.ledger_score == 1
        assert inspection.vote_count == 3
        assert inspection.drift == 3
        assert not inspection.is_consistent
        # Read-only
        assert store.scores[(TargetType.POST, post_id)] == 4

    @pytest.mark.asyncio
    async def test_missing_target_is_not_found(self, unit_env):
        diagnostics_service = await unit_env.get(DiagnosticsService)

        with pytest.raises(NotFoundError):
            await diagnostics_service.inspect_target(TargetType.TOPIC, TargetId(uuid4()))


class TestFindDrift:
    @pytest.mark.asyncio
    async def test_lists_only_drifted_targets(self, unit_env):
        # Arrange
        diagnostics_service = await unit_env.get(DiagnosticsService)
        store = await unit_env.get(InMemoryStore)
        add_target(store, TargetType.TOPIC)
        drifted_topic = add_target(store, TargetType.TOPIC, score=2)
        drifted_post = add_target(store, TargetType.POST, score=-1)

        # Act
        everything = await diagnostics_service.find_drift()
        posts_only = await diagnostics_service.find_drift(
            ReconciliationScope(target_type=TargetType.POST)
        )

        # Assert
        assert {i.target_id for i in everything} == {drifted_topic, drifted_post}
        assert [i.target_id for i in posts_only] == [drifted_post]
        assert store.scores[(TargetType.TOPIC, drifted_topic)] == 2


class TestProbeLedger:
    @pytest.mark.asyncio
    async def test_probe_leaves_no_trace(self, unit_env):
        # Arrange
        diagnostics_service = await unit_env.get(DiagnosticsService)
        store = await unit_env.get(InMemoryStore)

        # Act
        probe = await diagnostics_service.probe_ledger(VoterId(uuid4()))

        # Assert
        assert probe.can_read is True
        assert probe.can_write is True
        assert probe.read_error is None
        assert probe.write_error is None
        assert store.votes == {}

    @pytest.mark.asyncio
    async def test_probe_reports_write_failure(self, unit_env, monkeypatch):
        # Arrange
        diagnostics_service = await unit_env.get(DiagnosticsService)

        async def denied(self, vote):
            raise ProgrammingError(
                "INSERT INTO votes", {}, Exception("permission denied for table votes")
            )

        monkeypatch.setattr(InMemoryVoteRepository, "save", denied)

        # Act
        probe = await diagnostics_service.probe_ledger(VoterId(uuid4()))

        # Assert
        assert probe.can_read is True
        assert probe.can_write is False
        assert "permission denied" in probe.write_error
