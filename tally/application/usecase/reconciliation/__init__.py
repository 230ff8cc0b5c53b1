"""Reconciliation use cases."""

from .reconcile_scores import (
    CorrectionItem,
    ReconcileScoresRequest,
    ReconcileScoresResponse,
    ReconcileScoresUseCase,
    ReconciliationErrorItem,
)

__all__ = [
    "CorrectionItem",
    "ReconcileScoresRequest",
    "ReconcileScoresResponse",
    "ReconcileScoresUseCase",
    "ReconciliationErrorItem",
]
