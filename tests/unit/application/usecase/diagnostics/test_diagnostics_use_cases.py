"""Unit tests for the diagnostics use cases."""

from uuid import uuid4

import pytest

from tally.application.usecase.diagnostics import (
    FindDriftRequest,
    FindDriftUseCase,
    InspectTargetRequest,
    InspectTargetUseCase,
    ProbeLedgerRequest,
    ProbeLedgerUseCase,
)
from tally.domain.error import ForbiddenError
from tally.domain.value import TargetType
from tally.persistence.repository.inmemory import InMemoryStore
from tests.conftest import ADMIN_VOTER_ID, add_target
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ADMIN = str(ADMIN_VOTER_ID)


class TestInspectTargetUseCase:
    @pytest.mark.asyncio
    async def test_inspection_shape(self, unit_env):
        use_case = await unit_env.get(InspectTargetUseCase)
        store = await unit_env.get(InMemoryStore)
        topic_id = add_target(store, score=2)

        response = await use_case.execute(
            InspectTargetRequest(
                voter_id=ADMIN, target_type="topic", target_id=str(topic_id)
            )
        )

        assert response.model_dump(by_alias=True, mode="json") == {
            "targetType": "topic",
            "targetId": str(topic_id),
            "cachedScore": 2,
            "ledgerScore": 0,
            "voteCount": 0,
            "drift": 2,
            "isConsistent": False,
        }

    @pytest.mark.asyncio
    async def test_ordinary_voter_is_forbidden(self, unit_env):
        use_case = await unit_env.get(InspectTargetUseCase)
        store = await unit_env.get(InMemoryStore)
        topic_id = add_target(store)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                InspectTargetRequest(
                    voter_id=str(uuid4()),
                    target_type="topic",
                    target_id=str(topic_id),
                )
            )


class TestFindDriftUseCase:
    @pytest.mark.asyncio
    async def test_filters_by_type(self, unit_env):
        use_case = await unit_env.get(FindDriftUseCase)
        store = await unit_env.get(InMemoryStore)
        add_target(store, TargetType.TOPIC, score=1)
        post_id = add_target(store, TargetType.POST, score=1)

        response = await use_case.execute(
            FindDriftRequest(voter_id=ADMIN, target_type="post")
        )

        assert response.total == 1
        assert response.drifted[0].target_id == str(post_id)


class TestProbeLedgerUseCase:
    @pytest.mark.asyncio
    async def test_probe_succeeds_on_healthy_store(self, unit_env):
        use_case = await unit_env.get(ProbeLedgerUseCase)
        store = await unit_env.get(InMemoryStore)

        response = await use_case.execute(ProbeLedgerRequest(voter_id=ADMIN))

        assert response.can_read and response.can_write
        assert store.votes == {}
