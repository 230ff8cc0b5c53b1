"""Operator routes for reconciliation and diagnostics.

Every route requires a voter listed in ``admin.voter_ids``.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from tally.application.usecase.base import CamelModel
from tally.application.usecase.diagnostics import (
    FindDriftRequest,
    FindDriftResponse,
    FindDriftUseCase,
    InspectTargetRequest,
    InspectTargetUseCase,
    ProbeLedgerRequest,
    ProbeLedgerResponse,
    ProbeLedgerUseCase,
    TargetInspectionResponse,
)
from tally.application.usecase.reconciliation import (
    ReconcileScoresRequest,
    ReconcileScoresResponse,
    ReconcileScoresUseCase,
)
from tally.domain.service import JWTService
from tally.interface.api.envelope import Envelope, ok

router = APIRouter(prefix="/admin/votes", tags=["admin"], route_class=DishkaRoute)


class ReconcileBody(CamelModel):
    """Body of a reconciliation request; empty reconciles every target."""

    target_type: str | None = None
    target_id: str | None = None


@router.post("/reconcile", response_model=Envelope[ReconcileScoresResponse])
async def reconcile_scores(
    reconcile_use_case: FromDishka[ReconcileScoresUseCase],
    jwt_service: FromDishka[JWTService],
    body: ReconcileBody | None = None,
    auth_token: str | None = Cookie(default=None),
) -> Envelope[ReconcileScoresResponse]:
    """Recompute cached scores from the ledger and fix any drift.

    Args:
        reconcile_use_case: Reconcile scores use case from DI
        jwt_service: JWT service for token verification (injected)
        body: Optional scope
        auth_token: JWT token from cookie

    Returns:
        Counts, the first corrections, and per-target errors
    """
    voter_id = jwt_service.get_voter_id_from_token(auth_token)
    body = body or ReconcileBody()

    request = ReconcileScoresRequest(
        voter_id=str(voter_id) if voter_id else None,
        target_type=body.target_type,
        target_id=body.target_id,
    )
    return ok(await reconcile_use_case.execute(request))


@router.get("/drift", response_model=Envelope[FindDriftResponse])
async def find_drift(
    find_drift_use_case: FromDishka[FindDriftUseCase],
    jwt_service: FromDishka[JWTService],
    target_type: str | None = None,
    auth_token: str | None = Cookie(default=None),
) -> Envelope[FindDriftResponse]:
    """List targets whose cached score disagrees with the ledger, without fixing them."""
    voter_id = jwt_service.get_voter_id_from_token(auth_token)

    request = FindDriftRequest(
        voter_id=str(voter_id) if voter_id else None,
        target_type=target_type,
    )
    return ok(await find_drift_use_case.execute(request))


@router.post("/probe", response_model=Envelope[ProbeLedgerResponse])
async def probe_ledger(
    probe_ledger_use_case: FromDishka[ProbeLedgerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[ProbeLedgerResponse]:
    """Check the ledger accepts a read and a write; the write is rolled back."""
    voter_id = jwt_service.get_voter_id_from_token(auth_token)

    request = ProbeLedgerRequest(voter_id=str(voter_id) if voter_id else None)
    return ok(await probe_ledger_use_case.execute(request))


@router.get(
    "/{target_type}/{target_id}", response_model=Envelope[TargetInspectionResponse]
)
async def inspect_target(
    target_type: str,
    target_id: str,
    inspect_target_use_case: FromDishka[InspectTargetUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Envelope[TargetInspectionResponse]:
    """Show one target's cached score next to its ledger sum and vote count."""
    voter_id = jwt_service.get_voter_id_from_token(auth_token)

    request = InspectTargetRequest(
        voter_id=str(voter_id) if voter_id else None,
        target_type=target_type,
        target_id=target_id,
    )
    return ok(await inspect_target_use_case.execute(request))
