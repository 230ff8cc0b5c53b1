"""Unit tests for AccessService."""

from uuid import uuid4

import pytest

from tally.config import AdminSettings
from tally.domain.error import ForbiddenError, UnauthenticatedError
from tally.domain.service import AccessService
from tally.domain.value import VoterId


class TestRequireAdmin:
    def setup_method(self):
        self.admin_id = VoterId(uuid4())
        self.access_service = AccessService(
            admin_settings=AdminSettings(voter_ids=[self.admin_id])
        )

    def test_admin_passes(self):
        assert self.access_service.require_admin(self.admin_id) == self.admin_id

    def test_missing_voter_is_unauthenticated(self):
        with pytest.raises(UnauthenticatedError):
            self.access_service.require_admin(None)

    def test_ordinary_voter_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            self.access_service.require_admin(VoterId(uuid4()))

    def test_no_admins_configured_denies_everyone(self):
        access_service = AccessService(admin_settings=AdminSettings())

        assert access_service.is_admin(self.admin_id) is False
