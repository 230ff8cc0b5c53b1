"""Access control for operator-only operations."""

from typing import Optional

import logfire

from tally.config import AdminSettings
from tally.domain.error import ForbiddenError, UnauthenticatedError
from tally.domain.value import VoterId

from .base import Service


class AccessService(Service):
    """Decides who may run reconciliation and diagnostics."""

    def __init__(self, admin_settings: AdminSettings) -> None:
        self.admin_settings = admin_settings

    def is_admin(self, voter_id: Optional[VoterId]) -> bool:
        return voter_id is not None and voter_id in self.admin_settings.voter_ids

    def require_admin(self, voter_id: Optional[VoterId]) -> VoterId:
        """Return the voter if they are an operator.

        Raises:
            UnauthenticatedError: If there is no voter
            ForbiddenError: If the voter is not an operator
        """
        if voter_id is None:
            raise UnauthenticatedError("Authentication required")
        if not self.is_admin(voter_id):
            logfire.warn("Operator route denied", voter_id=str(voter_id))
            raise ForbiddenError("Operator privileges required")
        return voter_id
