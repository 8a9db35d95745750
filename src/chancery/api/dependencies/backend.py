"""Backend singletons - document store and auth provider."""

from typing import Annotated

from fastapi import Depends

from src.chancery.backend import (
    AuthProvider,
    DocumentStore,
    LocalAuthProvider,
    MemoryDocumentStore,
    SQLDocumentStore,
)
from src.chancery.core.config import get_settings
from src.chancery.core.logging import get_logger

logger = get_logger(__name__)

_store: DocumentStore | None = None
_auth_provider: AuthProvider | None = None


def get_document_store() -> DocumentStore:
    """Get or create the document store selected by STORE_BACKEND."""
    global _store
    if _store is None:
        settings = get_settings()
        if settings.store_backend == "sql":
            _store = SQLDocumentStore()
        else:
            _store = MemoryDocumentStore()
        logger.info("Document store ready", backend=settings.store_backend)
    return _store


def get_auth_provider() -> AuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = LocalAuthProvider(get_document_store())
    return _auth_provider


def reset_backend() -> None:
    """Drop the singletons (for testing)."""
    global _store, _auth_provider
    _store = None
    _auth_provider = None


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]
AuthProviderDep = Annotated[AuthProvider, Depends(get_auth_provider)]
