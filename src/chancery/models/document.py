"""Table backing the SQL document store."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.chancery.models.base import utc_now


class StoredDocument(SQLModel, table=True):
    """One document of one collection, fields kept as JSON."""

    __tablename__ = "documents"

    collection: str = Field(max_length=100, primary_key=True)
    id: str = Field(max_length=128, primary_key=True)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
