"""External collaborators - auth provider and document store.

Re-exports the ports, adapters and store errors.
"""

from src.chancery.backend.auth import AuthProvider, LocalAuthProvider, SentAction
from src.chancery.backend.sql_store import SQLDocumentStore
from src.chancery.backend.store import (
    Document,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentStore,
    DocumentStoreError,
    MemoryDocumentStore,
    PreconditionFailedError,
)

__all__ = [
    # Auth
    "AuthProvider",
    "LocalAuthProvider",
    "SentAction",
    # Store
    "Document",
    "DocumentStore",
    "MemoryDocumentStore",
    "SQLDocumentStore",
    # Errors
    "DocumentExistsError",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "PreconditionFailedError",
]
