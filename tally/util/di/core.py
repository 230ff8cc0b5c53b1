"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from tally.config import (
    AdminSettings,
    AuthSettings,
    ReconciliationSettings,
    Settings,
    VotingSettings,
)
from tally.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each nested section is provided on its own so services depend only on
    the part they read.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_admin_settings(self, settings: Settings) -> AdminSettings:
        return settings.admin

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        return settings.voting

    @provide(scope=Scope.APP)
    def provide_reconciliation_settings(
        self, settings: Settings
    ) -> ReconciliationSettings:
        return settings.reconciliation
