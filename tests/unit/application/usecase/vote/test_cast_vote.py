"""Unit tests for CastVoteUseCase and GetVoteViewUseCase."""

from uuid import uuid4

import pytest

from tally.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetVoteViewRequest,
    GetVoteViewUseCase,
)
from tally.domain.error import InvalidArgumentError, UnauthenticatedError
from tally.domain.value import TargetType, VoteOperation
from tally.persistence.repository.inmemory import InMemoryStore
from tests.conftest import add_target
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCastVoteUseCase:
    @pytest.mark.asyncio
    async def test_upvote_returns_wire_shape(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        store = await unit_env.get(InMemoryStore)
        topic_id = add_target(store, score=4)

        request = CastVoteRequest(
            target_type="topic",
            target_id=str(topic_id),
            vote_type=1,
            voter_id=str(uuid4()),
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.vote_type == 1
        assert response.vote_score == 5
        assert response.operation is VoteOperation.CREATED
        assert response.partial is False
        assert response.target_type is TargetType.TOPIC
        assert response.target_id == str(topic_id)
        assert response.model_dump(by_alias=True, mode="json") == {
            "voteType": 1,
            "voteScore": 5,
            "operation": "created",
            "partial": False,
            "targetType": "topic",
            "targetId": str(topic_id),
        }

    @pytest.mark.asyncio
    async def test_retraction_reports_null_vote_type(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        store = await unit_env.get(InMemoryStore)
        post_id = add_target(store, TargetType.POST)
        voter_id = str(uuid4())
        request = CastVoteRequest(
            target_type="post", target_id=str(post_id), vote_type=-1, voter_id=voter_id
        )
        await use_case.execute(request)

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.vote_type is None
        assert response.vote_score == 0
        assert response.operation is VoteOperation.REMOVED

    @pytest.mark.asyncio
    async def test_anonymous_request_is_rejected(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CastVoteRequest(target_type="topic", target_id="junk", vote_type=1)
            )

    @pytest.mark.asyncio
    async def test_malformed_target_id_is_invalid(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(InvalidArgumentError, match="targetId"):
            await use_case.execute(
                CastVoteRequest(
                    target_type="topic",
                    target_id="not-a-uuid",
                    vote_type=1,
                    voter_id=str(uuid4()),
                )
            )


class TestGetVoteViewUseCase:
    @pytest.mark.asyncio
    async def test_view_includes_callers_vote(self, unit_env):
        # Arrange
        cast_vote = await unit_env.get(CastVoteUseCase)
        get_view = await unit_env.get(GetVoteViewUseCase)
        store = await unit_env.get(InMemoryStore)
        topic_id = add_target(store)
        voter_id = str(uuid4())
        await cast_vote.execute(
            CastVoteRequest(
                target_type="topic",
                target_id=str(topic_id),
                vote_type=-1,
                voter_id=voter_id,
            )
        )

        # Act
        mine = await get_view.execute(
            GetVoteViewRequest(
                target_type="topic", target_id=str(topic_id), voter_id=voter_id
            )
        )
        anonymous = await get_view.execute(
            GetVoteViewRequest(target_type="topic", target_id=str(topic_id))
        )

        # Assert
        assert (mine.vote_score, mine.vote_type) == (-1, -1)
        assert (anonymous.vote_score, anonymous.vote_type) == (-1, None)
