"""Reconcile scores use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.config import ReconciliationSettings
from tally.domain.service import AccessService, ReconciliationService, parse_scope
from tally.domain.value import TargetType, VoterId


class ReconcileScoresRequest(BaseModel):
    """Reconcile scores request.

    Omit both target fields to reconcile everything, give only the type to
    reconcile one kind of target, or give both for a single target.
    """

    voter_id: str | None = None  # Must be an operator
    target_type: str | None = None
    target_id: str | None = None


class CorrectionItem(CamelModel):
    """A corrected score in the response."""

    target_type: TargetType
    target_id: str
    old_score: int
    new_score: int
    delta: int


class ReconciliationErrorItem(CamelModel):
    """A target that failed to reconcile."""

    target_type: TargetType
    target_id: str
    error: str


class ReconcileScoresResponse(CamelModel):
    """Reconcile scores response."""

    targets_checked: int
    targets_corrected: int
    corrections: list[CorrectionItem]  # Truncated, see the logs for all of them
    errors: list[ReconciliationErrorItem]


class ReconcileScoresUseCase(BaseUseCase):
    """Use case for an operator-triggered reconciliation pass."""

    def __init__(
        self,
        access_service: AccessService,
        reconciliation_service: ReconciliationService,
        reconciliation_settings: ReconciliationSettings,
    ) -> None:
        """Initialize reconcile scores use case.

        Args:
            access_service: Operator access checks
            reconciliation_service: Reconciliation domain service
            reconciliation_settings: Response truncation limit
        """
        self.access_service = access_service
        self.reconciliation_service = reconciliation_service
        self.reconciliation_settings = reconciliation_settings

    async def execute(self, request: ReconcileScoresRequest) -> ReconcileScoresResponse:
        """Execute reconcile scores flow.

        Raises:
            UnauthenticatedError: If no voter was resolved
            ForbiddenError: If the voter is not an operator
            InvalidArgumentError: If the scope is malformed
            NotFoundError: If a single-target scope names a missing target
        """
        self.access_service.require_admin(
            VoterId(UUID(request.voter_id)) if request.voter_id else None
        )
        scope = parse_scope(request.target_type, request.target_id)

        report = await self.reconciliation_service.reconcile(scope)

        limit = self.reconciliation_settings.max_reported_corrections
        return ReconcileScoresResponse(
            targets_checked=report.targets_checked,
            targets_corrected=report.targets_corrected,
            corrections=[
                CorrectionItem(
                    target_type=correction.target_type,
                    target_id=str(correction.target_id),
                    old_score=correction.old_score,
                    new_score=correction.new_score,
                    delta=correction.delta,
                )
                for correction in report.corrections[:limit]
            ],
            errors=[
                ReconciliationErrorItem(
                    target_type=failure.target_type,
                    target_id=str(failure.target_id),
                    error=failure.error,
                )
                for failure in report.errors
            ],
        )
