"""Diagnostics domain service.

Read-only inspection of ledger/cache consistency plus a rolled-back probe
that checks the store accepts ledger reads and writes.
"""

from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from tally.domain.error import NotFoundError, StoreUnavailableError
from tally.domain.model import LedgerProbe, TargetInspection, Vote
from tally.domain.repository import UnitOfWork, UnitOfWorkFactory
from tally.domain.value import (
    ReconciliationScope,
    TargetId,
    TargetType,
    VoteId,
    VoterId,
)

from .base import Service, store_errors
from .reconciliation_service import targets_in_scope

# Never a real topic; probe rows are always rolled back
PROBE_TARGET_ID = TargetId(UUID(int=0))


class DiagnosticsService(Service):
    """Domain service for consistency inspection."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    async def inspect_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> TargetInspection:
        """Compare one target's cached score with its ledger.

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span(
            "diagnostics_service.inspect_target",
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            with store_errors("inspect_target"):
                async with self.uow_factory() as uow:
                    inspection = await self._inspect(uow, target_type, target_id)

            if inspection is None:
                raise NotFoundError(target_type.value.capitalize(), str(target_id))
            return inspection

    async def find_drift(
        self, scope: Optional[ReconciliationScope] = None
    ) -> list[TargetInspection]:
        """List every target in scope whose cached score disagrees with the ledger.

        Reports only; fixing is left to reconciliation.
        """
        scope = scope or ReconciliationScope()
        with logfire.span("diagnostics_service.find_drift"):
            drifted: list[TargetInspection] = []
            with store_errors("find_drift"):
                async with self.uow_factory() as uow:
                    for target_type, target_id in await targets_in_scope(uow, scope):
                        inspection = await self._inspect(uow, target_type, target_id)
                        if inspection is not None and not inspection.is_consistent:
                            drifted.append(inspection)

            logfire.info("Drift scan completed", drifted=len(drifted))
            return drifted

    async def _inspect(
        self, uow: UnitOfWork, target_type: TargetType, target_id: TargetId
    ) -> Optional[TargetInspection]:
        cached = await uow.targets.get_score(target_type, target_id)
        if cached is None:
            return None
        tally = await uow.votes.tally(target_type, target_id)
        return TargetInspection(
            target_type=target_type,
            target_id=target_id,
            cached_score=cached,
            ledger_score=tally.score,
            vote_count=tally.vote_count,
        )

    async def probe_ledger(self, voter_id: VoterId) -> LedgerProbe:
        """Check that the ledger can be read and written, leaving no trace.

        The probe vote goes to a nil target ID and the transaction is always
        rolled back.
        """
        with logfire.span("diagnostics_service.probe_ledger", voter_id=str(voter_id)):
            read_error: Optional[str] = None
            write_error: Optional[str] = None

            with store_errors("probe_ledger"):
                async with self.uow_factory() as uow:
                    try:
                        await uow.votes.find_by_target_and_voter(
                            TargetType.TOPIC, PROBE_TARGET_ID, voter_id
                        )
                    except (SQLAlchemyError, StoreUnavailableError) as e:
                        read_error = str(e)
                        await uow.rollback()

                    try:
                        async with uow.savepoint():
                            await uow.votes.save(
                                Vote(
                                    id=VoteId(uuid4()),
                                    target_type=TargetType.TOPIC,
                                    target_id=PROBE_TARGET_ID,
                                    voter_id=voter_id,
                                    weight=1,
                                )
                            )
                    except (SQLAlchemyError, StoreUnavailableError) as e:
                        write_error = str(e)

                    await uow.rollback()

            probe = LedgerProbe(
                can_read=read_error is None,
                can_write=write_error is None,
                read_error=read_error,
                write_error=write_error,
            )
            logfire.info(
                "Ledger probe completed",
                can_read=probe.can_read,
                can_write=probe.can_write,
            )
            return probe
