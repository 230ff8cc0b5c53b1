"""Find drift use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.domain.service import AccessService, DiagnosticsService, parse_scope
from tally.domain.value import VoterId

from .inspect_target import TargetInspectionResponse


class FindDriftRequest(BaseModel):
    """Find drift request."""

    voter_id: str | None = None  # Must be an operator
    target_type: str | None = None  # All types when omitted


class FindDriftResponse(CamelModel):
    """Targets whose cached score disagrees with the ledger."""

    drifted: list[TargetInspectionResponse]
    total: int


class FindDriftUseCase(BaseUseCase):
    """Use case for a read-only drift scan."""

    def __init__(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> None:
        self.access_service = access_service
        self.diagnostics_service = diagnostics_service

    async def execute(self, request: FindDriftRequest) -> FindDriftResponse:
        """Execute find drift flow.

        Nothing is corrected; run reconciliation to repair what this reports.
        """
        self.access_service.require_admin(
            VoterId(UUID(request.voter_id)) if request.voter_id else None
        )
        drifted = await self.diagnostics_service.find_drift(
            parse_scope(request.target_type)
        )
        return FindDriftResponse(
            drifted=[
                TargetInspectionResponse.from_inspection(inspection)
                for inspection in drifted
            ],
            total=len(drifted),
        )
