"""Reconciliation domain service.

Recomputes cached scores from the vote ledger and repairs any drift. Vote
transitions keep the two in step transactionally; this pass is the repair
path for out-of-band edits and for partial successes, where the ledger
committed but the score write did not.
"""

import sys
from typing import Optional

import logfire

from tally.config import ReconciliationSettings
from tally.domain.error import ConflictError, InvalidArgumentError, NotFoundError
from tally.domain.model import (
    ReconciliationFailure,
    ReconciliationReport,
    ScoreCorrection,
)
from tally.domain.repository import UnitOfWork, UnitOfWorkFactory
from tally.domain.value import ReconciliationScope, TargetId, TargetType

from .base import Service, store_errors
from .vote_service import parse_target_id, parse_target_type


def parse_scope(
    target_type: Optional[str] = None, target_id: Optional[str] = None
) -> ReconciliationScope:
    """Build a scope from wire values.

    Raises:
        InvalidArgumentError: If a value is malformed or an ID comes without a type
    """
    if target_id is not None and target_type is None:
        raise InvalidArgumentError("targetId requires targetType")
    return ReconciliationScope(
        target_type=None if target_type is None else parse_target_type(target_type),
        target_id=None if target_id is None else parse_target_id(target_id),
    )


async def targets_in_scope(
    uow: UnitOfWork, scope: ReconciliationScope
) -> list[tuple[TargetType, TargetId]]:
    """List the targets a scope covers.

    Raises:
        NotFoundError: If the scope names a single target that does not exist
    """
    if scope.target_type is not None and scope.target_id is not None:
        if not await uow.targets.exists(scope.target_type, scope.target_id):
            raise NotFoundError(
                scope.target_type.value.capitalize(), str(scope.target_id)
            )
        return [(scope.target_type, scope.target_id)]

    target_types = [scope.target_type] if scope.target_type else list(TargetType)
    targets: list[tuple[TargetType, TargetId]] = []
    for target_type in target_types:
        for target_id in await uow.targets.list_ids(target_type):
            targets.append((target_type, target_id))
    return targets


class ReconciliationService(Service):
    """Domain service that brings cached scores back in line with the ledger."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        reconciliation_settings: ReconciliationSettings,
    ) -> None:
        """Initialize reconciliation service.

        Args:
            uow_factory: Opens one transaction per target
            reconciliation_settings: Retry budget for compare-and-set
        """
        self.uow_factory = uow_factory
        self.settings = reconciliation_settings

    async def reconcile(
        self, scope: Optional[ReconciliationScope] = None
    ) -> ReconciliationReport:
        """Recompute and correct cached scores.

        A failure on one target is logged and reported; the batch continues.

        Args:
            scope: Targets to cover, every target when omitted

        Returns:
            Counts, corrections made, and per-target errors

        Raises:
            NotFoundError: If the scope names a single missing target
            StoreUnavailableError: If the targets cannot be listed at all
        """
        scope = scope or ReconciliationScope()
        with logfire.span(
            "reconciliation_service.reconcile",
            target_type=scope.target_type.value if scope.target_type else None,
            target_id=str(scope.target_id) if scope.target_id else None,
        ):
            with store_errors("reconcile"):
                async with self.uow_factory() as uow:
                    targets = await targets_in_scope(uow, scope)

            corrections: list[ScoreCorrection] = []
            errors: list[ReconciliationFailure] = []
            for target_type, target_id in targets:
                try:
                    correction = await self._reconcile_target(target_type, target_id)
                except Exception as e:
                    logfire.error(
                        "Reconciliation failed for target",
                        target_type=target_type.value,
                        target_id=str(target_id),
                        error=str(e),
                        _exc_info=sys.exc_info(),
                    )
                    errors.append(
                        ReconciliationFailure(
                            target_type=target_type,
                            target_id=target_id,
                            error=str(e),
                        )
                    )
                    continue

                if correction is not None:
                    logfire.info(
                        "Score corrected",
                        target_type=target_type.value,
                        target_id=str(target_id),
                        old_score=correction.old_score,
                        new_score=correction.new_score,
                        delta=correction.delta,
                    )
                    corrections.append(correction)

            report = ReconciliationReport(
                targets_checked=len(targets),
                corrections=corrections,
                errors=errors,
            )
            logfire.info(
                "Reconciliation completed",
                targets_checked=report.targets_checked,
                targets_corrected=report.targets_corrected,
                error_count=len(errors),
            )
            return report

    async def _reconcile_target(
        self, target_type: TargetType, target_id: TargetId
    ) -> Optional[ScoreCorrection]:
        """Correct one target, or return None if it was already consistent."""
        for attempt in range(1, self.settings.max_attempts + 1):
            with store_errors("reconcile_target"):
                async with self.uow_factory() as uow:
                    # Lock the score row first so the tally sees every
                    # transition that already touched it
                    cached = await uow.targets.get_score(
                        target_type, target_id, for_update=True
                    )
                    if cached is None:
                        raise NotFoundError(
                            target_type.value.capitalize(), str(target_id)
                        )

                    tally = await uow.votes.tally(target_type, target_id)
                    if cached == tally.score:
                        return None

                    if await uow.targets.compare_and_set_score(
                        target_type, target_id, expected=cached, new=tally.score
                    ):
                        return ScoreCorrection(
                            target_type=target_type,
                            target_id=target_id,
                            old_score=cached,
                            new_score=tally.score,
                        )

            logfire.warn(
                "Score moved during reconciliation, retrying",
                target_id=str(target_id),
                attempt=attempt,
            )

        raise ConflictError(
            f"Score for {target_type.value} {target_id} kept changing during reconciliation"
        )
