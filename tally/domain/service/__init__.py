"""Domain services."""

from .access_service import AccessService
from .base import Service, store_errors
from .diagnostics_service import DiagnosticsService
from .jwt_service import JWTService
from .reconciliation_service import (
    ReconciliationService,
    parse_scope,
    targets_in_scope,
)
from .vote_service import (
    VoteService,
    parse_target_id,
    parse_target_type,
    parse_vote_state,
)

__all__ = [
    "AccessService",
    "DiagnosticsService",
    "JWTService",
    "ReconciliationService",
    "Service",
    "VoteService",
    "parse_scope",
    "parse_target_id",
    "parse_target_type",
    "parse_vote_state",
    "store_errors",
    "targets_in_scope",
]
