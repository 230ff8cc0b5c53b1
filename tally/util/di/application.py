"""Application layer DI providers."""

from dishka import Scope, provide

from tally.application.usecase.diagnostics import (
    FindDriftUseCase,
    InspectTargetUseCase,
    ProbeLedgerUseCase,
)
from tally.application.usecase.reconciliation import ReconcileScoresUseCase
from tally.application.usecase.vote import CastVoteUseCase, GetVoteViewUseCase
from tally.config import ReconciliationSettings
from tally.domain.service import (
    AccessService,
    DiagnosticsService,
    ReconciliationService,
    VoteService,
)
from tally.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_vote_view_use_case(
        self, vote_service: VoteService
    ) -> GetVoteViewUseCase:
        """Provide get vote view use case."""
        return GetVoteViewUseCase(vote_service=vote_service)

    # Reconciliation use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_scores_use_case(
        self,
        access_service: AccessService,
        reconciliation_service: ReconciliationService,
        reconciliation_settings: ReconciliationSettings,
    ) -> ReconcileScoresUseCase:
        """Provide reconcile scores use case."""
        return ReconcileScoresUseCase(
            access_service=access_service,
            reconciliation_service=reconciliation_service,
            reconciliation_settings=reconciliation_settings,
        )

    # Diagnostics use cases
    @provide(scope=Scope.REQUEST)
    def get_inspect_target_use_case(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> InspectTargetUseCase:
        """Provide inspect target use case."""
        return InspectTargetUseCase(
            access_service=access_service, diagnostics_service=diagnostics_service
        )

    @provide(scope=Scope.REQUEST)
    def get_find_drift_use_case(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> FindDriftUseCase:
        """Provide find drift use case."""
        return FindDriftUseCase(
            access_service=access_service, diagnostics_service=diagnostics_service
        )

    @provide(scope=Scope.REQUEST)
    def get_probe_ledger_use_case(
        self, access_service: AccessService, diagnostics_service: DiagnosticsService
    ) -> ProbeLedgerUseCase:
        """Provide probe ledger use case."""
        return ProbeLedgerUseCase(
            access_service=access_service, diagnostics_service=diagnostics_service
        )
