"""Base repository over the document store."""

from typing import Any

from pydantic import BaseModel

from src.chancery.backend.store import DocumentStore


class DocumentRepository[ModelType: BaseModel]:
    """Base repository mapping one collection to one pydantic model.

    Repositories handle data access only. Ordering of multi-document
    writes is the service layer's concern.
    """

    model: type[ModelType]
    collection: str
    id_field: str = "id"

    def __init__(self, store: DocumentStore):
        self.store = store

    def to_document(self, entity: ModelType) -> dict[str, Any]:
        return entity.model_dump(mode="json")

    def from_document(self, document: dict[str, Any]) -> ModelType:
        return self.model.model_validate(document)

    async def get_by_id(self, doc_id: str) -> ModelType | None:
        """Get a record by its document id."""
        document = await self.store.get(self.collection, doc_id)
        return self.from_document(document) if document is not None else None

    async def add(self, entity: ModelType) -> ModelType:
        """Create the document; raises DocumentExistsError if the id is taken."""
        doc_id = getattr(entity, self.id_field)
        await self.store.create(self.collection, doc_id, self.to_document(entity))
        return entity

    async def find(self, **equals: Any) -> list[ModelType]:
        documents = await self.store.query(self.collection, **equals)
        return [self.from_document(document) for document in documents]
