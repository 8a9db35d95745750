"""Document store port and the in-memory adapter.

Documents are plain JSON-compatible dicts addressed by (collection, id).
There are no cross-document transactions; ``update`` can be made
conditional with ``expected`` field values, checked atomically with the write.
"""

import asyncio
import copy
from collections import defaultdict
from collections.abc import Mapping
from typing import Any, Protocol

from src.chancery.core.logging import get_logger

logger = get_logger(__name__)

Document = dict[str, Any]


class DocumentStoreError(Exception):
    """Base class for document store failures."""

    def __init__(self, collection: str, doc_id: str, message: str):
        super().__init__(f"{collection}/{doc_id}: {message}")
        self.collection = collection
        self.doc_id = doc_id


class DocumentNotFoundError(DocumentStoreError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(collection, doc_id, "document not found")


class DocumentExistsError(DocumentStoreError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(collection, doc_id, "document already exists")


class PreconditionFailedError(DocumentStoreError):
    """Stored fields did not match the expected values of a conditional update."""

    def __init__(self, collection: str, doc_id: str, field: str, actual: Any):
        super().__init__(collection, doc_id, f"precondition failed on '{field}' (was {actual!r})")
        self.field = field
        self.actual = actual


class DocumentStore(Protocol):
    """Async document store used by repositories."""

    async def get(self, collection: str, doc_id: str) -> Document | None: ...

    async def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None: ...

    async def update(
        self,
        collection: str,
        doc_id: str,
        patch: Mapping[str, Any],
        expected: Mapping[str, Any] | None = None,
    ) -> Document: ...

    async def delete(
        self, collection: str, doc_id: str, expected: Mapping[str, Any] | None = None
    ) -> bool: ...

    async def query(self, collection: str, **equals: Any) -> list[Document]: ...

    async def ping(self) -> bool: ...


def check_expected(
    collection: str, doc_id: str, current: Mapping[str, Any], expected: Mapping[str, Any] | None
) -> None:
    """Raise PreconditionFailedError on the first field that differs."""
    for field, value in (expected or {}).items():
        if current.get(field) != value:
            raise PreconditionFailedError(collection, doc_id, field, current.get(field))


def matches(document: Mapping[str, Any], equals: Mapping[str, Any]) -> bool:
    return all(document.get(field) == value for field, value in equals.items())


class MemoryDocumentStore:
    """Process-local store. Default backend and the one tests run against."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self._lock = asyncio.Lock()

    async def get(self, collection: str, doc_id: str) -> Document | None:
        document = self._collections[collection].get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        async with self._lock:
            if doc_id in self._collections[collection]:
                raise DocumentExistsError(collection, doc_id)
            self._collections[collection][doc_id] = copy.deepcopy(dict(data))

    async def update(
        self,
        collection: str,
        doc_id: str,
        patch: Mapping[str, Any],
        expected: Mapping[str, Any] | None = None,
    ) -> Document:
        async with self._lock:
            current = self._collections[collection].get(doc_id)
            if current is None:
                raise DocumentNotFoundError(collection, doc_id)
            check_expected(collection, doc_id, current, expected)
            current.update(copy.deepcopy(dict(patch)))
            return copy.deepcopy(current)

    async def delete(
        self, collection: str, doc_id: str, expected: Mapping[str, Any] | None = None
    ) -> bool:
        """Remove a document; False when it was already gone."""
        async with self._lock:
            current = self._collections[collection].get(doc_id)
            if current is None:
                return False
            check_expected(collection, doc_id, current, expected)
            del self._collections[collection][doc_id]
            return True

    async def query(self, collection: str, **equals: Any) -> list[Document]:
        return [
            copy.deepcopy(document)
            for document in self._collections[collection].values()
            if matches(document, equals)
        ]

    async def ping(self) -> bool:
        return True

    def clear(self) -> None:
        """Drop every collection (for testing)."""
        self._collections.clear()
