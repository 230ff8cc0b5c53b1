"""Diagnostics use cases."""

from .find_drift import FindDriftRequest, FindDriftResponse, FindDriftUseCase
from .inspect_target import (
    InspectTargetRequest,
    InspectTargetUseCase,
    TargetInspectionResponse,
)
from .probe_ledger import (
    ProbeLedgerRequest,
    ProbeLedgerResponse,
    ProbeLedgerUseCase,
)

__all__ = [
    "FindDriftRequest",
    "FindDriftResponse",
    "FindDriftUseCase",
    "InspectTargetRequest",
    "InspectTargetUseCase",
    "ProbeLedgerRequest",
    "ProbeLedgerResponse",
    "ProbeLedgerUseCase",
    "TargetInspectionResponse",
]
