"""Probe ledger use case."""

from uuid import UUID

from pydantic import BaseModel

from tally.application.usecase.base import BaseUseCase, CamelModel
from tally.domain.service import AccessService, DiagnosticsService
from tally.domain.value import VoterId


class ProbeLedgerRequest(BaseModel):
    """Probe ledger request."""

    voter_id: str | None = None  # Must be an operator


class ProbeLedgerResponse(CamelModel):
    """Whether the ledger accepted a read and a rolled-back write."""

    can_read: bool
    can_write: bool
    read_error: str | None
    write_error: str | None


class ProbeLedgerUseCase(BaseUseCase):
    """Use case for checking ledger permissions without leaving data behind."""

    def __init__(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> None:
        self.access_service = access_service
        self.diagnostics_service = diagnostics_service

    async def execute(self, request: ProbeLedgerRequest) -> ProbeLedgerResponse:
        voter_id = self.access_service.require_admin(
            VoterId(UUID(request.voter_id)) if request.voter_id else None
        )
        probe = await self.diagnostics_service.probe_ledger(voter_id)
        return ProbeLedgerResponse(
            can_read=probe.can_read,
            can_write=probe.can_write,
            read_error=probe.read_error,
            write_error=probe.write_error,
        )
