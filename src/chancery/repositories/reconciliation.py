"""Inconsistent-state events awaiting an administrator."""

from src.chancery.models.reconciliation import InconsistentStateWarning
from src.chancery.repositories.base import DocumentRepository


class ReconciliationRepository(DocumentRepository[InconsistentStateWarning]):
    model = InconsistentStateWarning
    collection = "reconciliation_events"
