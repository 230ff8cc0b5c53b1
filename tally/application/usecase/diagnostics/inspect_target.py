"""Inspect target use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.domain.model import TargetInspection
from tally.domain.service import (
    AccessService,
    DiagnosticsService,
    parse_target_id,
    parse_target_type,
)
from tally.domain.value import TargetType, VoterId


class InspectTargetRequest(BaseModel):
    """Inspect target request."""

    voter_id: str | None = None  # Must be an operator
    target_type: str
    target_id: str


class TargetInspectionResponse(CamelModel):
    """Cached score and ledger tally of one target."""

    target_type: TargetType
    target_id: str
    cached_score: int
    ledger_score: int
    vote_count: int
    drift: int
    is_consistent: bool

    @classmethod
    def from_inspection(
        cls, inspection: TargetInspection
    ) -> "TargetInspectionResponse":
        return cls(
            target_type=inspection.target_type,
            target_id=str(inspection.target_id),
            cached_score=inspection.cached_score,
            ledger_score=inspection.ledger_score,
            vote_count=inspection.vote_count,
            drift=inspection.drift,
            is_consistent=inspection.is_consistent,
        )


class InspectTargetUseCase(BaseUseCase):
    """Use case for comparing one target's cached score with its ledger."""

    def __init__(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> None:
        self.access_service = access_service
        self.diagnostics_service = diagnostics_service

    async def execute(self, request: InspectTargetRequest) -> TargetInspectionResponse:
        self.access_service.require_admin(
            VoterId(UUID(request.voter_id)) if request.voter_id else None
        )
        inspection = await self.diagnostics_service.inspect_target(
            parse_target_type(request.target_type),
            parse_target_id(request.target_id),
        )
        return TargetInspectionResponse.from_inspection(inspection)
