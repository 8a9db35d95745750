"""Repositories - data access over the document store."""

from src.chancery.repositories.base import DocumentRepository
from src.chancery.repositories.invitation import InvitationRepository
from src.chancery.repositories.profile import UserProfileRepository
from src.chancery.repositories.reconciliation import ReconciliationRepository

__all__ = [
    "DocumentRepository",
    "InvitationRepository",
    "ReconciliationRepository",
    "UserProfileRepository",
]
