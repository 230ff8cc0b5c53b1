"""Vote domain service: the transition engine and the vote read path."""

import asyncio
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from tally.config import VotingSettings
from tally.domain.error import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
    UnauthenticatedError,
)
from tally.domain.model import Vote, VoteOutcome, VoteView
from tally.domain.repository import UnitOfWork, UnitOfWorkFactory
from tally.domain.value import (
    TOGGLE,
    LedgerWrite,
    TargetId,
    TargetType,
    Transition,
    VoteId,
    VoterId,
    VoteState,
    resolve,
    resolve_stale,
)

from .base import Service, store_errors


class _LedgerConflict(Exception):
    """A concurrent transition by the same voter changed the row first."""


def parse_target_type(target_type: TargetType | str) -> TargetType:
    """Coerce a wire target type.

    Raises:
        InvalidArgumentError: If it is not topic or post
    """
    try:
        return TargetType(target_type)
    except ValueError:
        raise InvalidArgumentError(
            f'targetType must be "topic" or "post", got {target_type!r}'
        )


def parse_target_id(target_id: TargetId | str) -> TargetId:
    """Coerce a wire target ID.

    Raises:
        InvalidArgumentError: If it is not a UUID
    """
    if isinstance(target_id, UUID):
        return TargetId(target_id)
    try:
        return TargetId(UUID(target_id))
    except (ValueError, TypeError, AttributeError):
        raise InvalidArgumentError(f"targetId must be a UUID, got {target_id!r}")


def parse_vote_state(requested: VoteState | int | None) -> VoteState:
    """Coerce a wire weight (1, -1, None) or a VoteState.

    Raises:
        InvalidArgumentError: If the weight is not permitted
    """
    if isinstance(requested, VoteState):
        return requested
    try:
        return VoteState.from_weight(requested)
    except ValueError as e:
        raise InvalidArgumentError(str(e))


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self, uow_factory: UnitOfWorkFactory, voting_settings: VotingSettings
    ) -> None:
        """Initialize vote service.

        Args:
            uow_factory: Opens one transaction per attempt
            voting_settings: Timeout and retry budget
        """
        self.uow_factory = uow_factory
        self.voting_settings = voting_settings

    async def apply_vote(
        self,
        target_type: TargetType | str,
        target_id: TargetId,
        voter_id: Optional[VoterId],
        requested: VoteState | int | None,
    ) -> VoteOutcome:
        """Apply a voter's requested vote to a target.

        The ledger write and the score change commit together. Repeating the
        current vote retracts it; voting the other way flips it.

        Args:
            target_type: topic or post
            target_id: Target ID
            voter_id: Authenticated voter, None if the caller has no identity
            requested: +1, -1 or None (clear)

        Returns:
            The voter's resulting state and the target's score

        Raises:
            UnauthenticatedError: If there is no voter
            InvalidArgumentError: If the target type or weight is malformed
            NotFoundError: If the target does not exist
            ConflictError: If concurrent writes still collide after the retry
            StoreUnavailableError: On infrastructure failure or timeout
        """
        if voter_id is None:
            raise UnauthenticatedError()
        target_type = parse_target_type(target_type)
        requested = parse_vote_state(requested)

        with logfire.span(
            "vote_service.apply_vote",
            target_type=target_type.value,
            target_id=str(target_id),
            voter_id=str(voter_id),
            requested=requested.name,
        ):
            try:
                return await asyncio.wait_for(
                    self._transition(target_type, target_id, voter_id, requested),
                    timeout=self.voting_settings.transition_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logfire.error(
                    "Vote transition timed out",
                    target_id=str(target_id),
                    voter_id=str(voter_id),
                )
                raise StoreUnavailableError("Vote transition timed out")

    async def _transition(
        self,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
        requested: VoteState,
    ) -> VoteOutcome:
        # The voter's state as this request first saw it, before any lock.
        # If it has moved by the time the row is locked, another request by
        # the same voter got there first; see resolve_stale.
        first_seen: Optional[VoteState] = None
        attempts = 1 + self.voting_settings.conflict_retries
        for attempt in range(1, attempts + 1):
            try:
                with store_errors("apply_vote"):
                    async with self.uow_factory() as uow:
                        if first_seen is None:
                            first_seen = await self._voter_state(
                                uow, target_type, target_id, voter_id
                            )
                        return await self._attempt(
                            uow,
                            target_type,
                            target_id,
                            voter_id,
                            requested,
                            first_seen,
                        )
            except _LedgerConflict:
                logfire.warn(
                    "Vote ledger conflict",
                    attempt=attempt,
                    target_id=str(target_id),
                    voter_id=str(voter_id),
                )

        raise ConflictError("Vote conflicted with a concurrent request, try again")

    @staticmethod
    async def _voter_state(
        uow: UnitOfWork,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
    ) -> VoteState:
        vote = await uow.votes.find_by_target_and_voter(
            target_type, target_id, voter_id
        )
        return vote.state if vote else VoteState.NONE

    async def _attempt(
        self,
        uow: UnitOfWork,
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
        requested: VoteState,
        first_seen: VoteState,
    ) -> VoteOutcome:
        if not await uow.targets.exists(target_type, target_id):
            logfire.warn("Vote on non-existent target", target_id=str(target_id))
            raise NotFoundError(target_type.value.capitalize(), str(target_id))

        existing = await uow.votes.find_by_target_and_voter(
            target_type, target_id, voter_id, for_update=True
        )
        current = existing.state if existing else VoteState.NONE
        if current is first_seen:
            transition = resolve(current, requested, TOGGLE)
        else:
            transition = resolve_stale(first_seen, current, requested)
            logfire.info(
                "Voter state moved under request",
                target_id=str(target_id),
                voter_id=str(voter_id),
                first_seen=first_seen.name,
                current=current.name,
            )
        # Read after the locked vote row
        cached_score = await uow.targets.get_score(target_type, target_id) or 0

        if transition.write is LedgerWrite.NOOP:
            return VoteOutcome(
                target_type=target_type,
                target_id=target_id,
                state=transition.result,
                score=cached_score,
                operation=transition.operation,
            )

        await self._write_ledger(
            uow, transition, existing, target_type, target_id, voter_id
        )

        delta = transition.delta(current)
        partial = False
        try:
            async with uow.savepoint():
                score = await uow.targets.apply_score_delta(
                    target_type, target_id, delta
                )
        except (SQLAlchemyError, StoreUnavailableError) as e:
            # Ledger stays; reconciliation repairs the cache
            logfire.error(
                "Score cache write failed after ledger write",
                target_type=target_type.value,
                target_id=str(target_id),
                delta=delta,
                error=str(e),
            )
            score = cached_score + delta
            partial = True

        logfire.info(
            "Vote applied",
            target_id=str(target_id),
            voter_id=str(voter_id),
            operation=transition.operation.value,
            state=transition.result.name,
            score=score,
            partial=partial,
        )
        return VoteOutcome(
            target_type=target_type,
            target_id=target_id,
            state=transition.result,
            score=score,
            operation=transition.operation,
            partial=partial,
        )

    async def _write_ledger(
        self,
        uow: UnitOfWork,
        transition: Transition,
        existing: Optional[Vote],
        target_type: TargetType,
        target_id: TargetId,
        voter_id: VoterId,
    ) -> None:
        """Perform the transition's single ledger write.

        Raises:
            _LedgerConflict: If the row changed since it was read
        """
        if transition.write is LedgerWrite.INSERT:
            vote = Vote(
                id=VoteId(uuid4()),
                target_type=target_type,
                target_id=target_id,
                voter_id=voter_id,
                weight=int(transition.result),
            )
            try:
                await uow.votes.save(vote)
            except IntegrityError as e:
                raise _LedgerConflict() from e
            return

        if existing is None:
            raise _LedgerConflict()
        if transition.write is LedgerWrite.UPDATE:
            written = await uow.votes.update_weight(
                existing.id, existing.weight, int(transition.result)
            )
        else:
            written = await uow.votes.delete(existing.id, existing.weight)

        if not written:
            raise _LedgerConflict()

    async def get_vote_view(
        self,
        target_type: TargetType | str,
        target_id: TargetId,
        voter_id: Optional[VoterId] = None,
    ) -> VoteView:
        """Read a target's cached score and the voter's state.

        Never repairs drift; that is reconciliation's job.

        Raises:
            InvalidArgumentError: If the target type is malformed
            NotFoundError: If the target does not exist
        """
        target_type = parse_target_type(target_type)
        with logfire.span(
            "vote_service.get_vote_view",
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            with store_errors("get_vote_view"):
                async with self.uow_factory() as uow:
                    score = await uow.targets.get_score(target_type, target_id)
                    if score is None:
                        raise NotFoundError(
                            target_type.value.capitalize(), str(target_id)
                        )

                    voter_state = None
                    if voter_id is not None:
                        vote = await uow.votes.find_by_target_and_voter(
                            target_type, target_id, voter_id
                        )
                        voter_state = vote.state if vote else VoteState.NONE

            return VoteView(score=score, voter_state=voter_state)

    async def get_voter_states(
        self,
        voter_id: VoterId,
        target_type: TargetType,
        target_ids: Sequence[TargetId],
    ) -> dict[TargetId, VoteState]:
        """Look up a voter's state on many targets at once.

        Args:
            voter_id: Voter ID
            target_type: Type of the targets
            target_ids: Targets to check

        Returns:
            Mapping of every requested target ID to the voter's state
        """
        if not target_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        with store_errors("get_voter_states"):
            async with self.uow_factory() as uow:
                votes = await uow.votes.find_by_voter_and_targets(
                    voter_id, target_type, target_ids
                )

        states = {vote.target_id: vote.state for vote in votes}
        return {tid: states.get(tid, VoteState.NONE) for tid in target_ids}
