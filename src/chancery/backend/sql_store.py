"""SQL-backed document store over the ``documents`` table."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import select

from src.chancery.backend.store import (
    Document,
    DocumentExistsError,
    DocumentNotFoundError,
    check_expected,
    matches,
)
from src.chancery.core.db import get_session
from src.chancery.core.logging import get_logger
from src.chancery.models.base import utc_now
from src.chancery.models.document import StoredDocument

logger = get_logger(__name__)


class SQLDocumentStore:
    """Document store using one JSON row per document.

    Conditional updates lock the row (SELECT ... FOR UPDATE) so the
    expected-value check and the write happen together.
    """

    def __init__(self, engine: AsyncEngine | None = None):
        self.engine = engine

    async def get(self, collection: str, doc_id: str) -> Document | None:
        async with get_session(self.engine) as session:
            row = await session.get(StoredDocument, (collection, doc_id))
            return dict(row.data) if row is not None else None

    async def create(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        async with get_session(self.engine) as session:
            session.add(StoredDocument(collection=collection, id=doc_id, data=dict(data)))
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DocumentExistsError(collection, doc_id) from e

    async def update(
        self,
        collection: str,
        doc_id: str,
        patch: Mapping[str, Any],
        expected: Mapping[str, Any] | None = None,
    ) -> Document:
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(StoredDocument)
                .where(StoredDocument.collection == collection, StoredDocument.id == doc_id)
                .with_for_update()
            )
            row = result.scalar_one_or_none()
            if row is None:
                raise DocumentNotFoundError(collection, doc_id)
            check_expected(collection, doc_id, row.data, expected)

            # Reassign so SQLAlchemy sees the JSON column change
            row.data = {**row.data, **patch}
            row.updated_at = utc_now()
            await session.commit()
            return dict(row.data)

    async def delete(
        self, collection: str, doc_id: str, expected: Mapping[str, Any] | None = None
    ) -> bool:
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(StoredDocument)
                .where(StoredDocument.collection == collection, StoredDocument.id == doc_id)
                .with_for_update()
            )
            row = result.scalar_one_or_none()
            if row is None:
                return False
            check_expected(collection, doc_id, row.data, expected)
            await session.delete(row)
            await session.commit()
            return True

    async def query(self, collection: str, **equals: Any) -> list[Document]:
        # Field filtering happens here rather than in JSON SQL so it works on any dialect
        async with get_session(self.engine) as session:
            result = await session.execute(
                select(StoredDocument).where(StoredDocument.collection == collection)
            )
            documents = [dict(row.data) for row in result.scalars().all()]
        return [document for document in documents if matches(document, equals)]

    async def ping(self) -> bool:
        try:
            async with get_session(self.engine) as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Document store ping failed", error=str(e))
            return False
