"""Domain layer DI providers."""

from dishka import Scope, provide

from tally.config import (
    AdminSettings,
    AuthSettings,
    ReconciliationSettings,
    VotingSettings,
)
from tally.domain.repository import UnitOfWorkFactory
from tally.domain.service import (
    AccessService,
    DiagnosticsService,
    JWTService,
    ReconciliationService,
    VoteService,
)
from tally.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped. They hold no state between calls;
    every operation opens its own unit of work from the factory.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_access_service(self, admin_settings: AdminSettings) -> AccessService:
        """Provide operator access domain service."""
        return AccessService(admin_settings=admin_settings)

    @provide
    def get_vote_service(
        self, uow_factory: UnitOfWorkFactory, voting_settings: VotingSettings
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(uow_factory=uow_factory, voting_settings=voting_settings)

    @provide
    def get_reconciliation_service(
        self,
        uow_factory: UnitOfWorkFactory,
        reconciliation_settings: ReconciliationSettings,
    ) -> ReconciliationService:
        """Provide reconciliation domain service."""
        return ReconciliationService(
            uow_factory=uow_factory,
            reconciliation_settings=reconciliation_settings,
        )

    @provide
    def get_diagnostics_service(
        self, uow_factory: UnitOfWorkFactory
    ) -> DiagnosticsService:
        """Provide diagnostics domain service."""
        return DiagnosticsService(uow_factory=uow_factory)
