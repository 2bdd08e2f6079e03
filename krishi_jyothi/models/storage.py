# krishi_jyothi/models/storage.py
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class StorageEntry(SQLModel, table=True):
    """
    One key of a browser session's key-value store.

    A "scope" is the id carried by a session token; it plays the
    role of one browser's local storage. Values are JSON strings.
    """

    __tablename__ = "storage_entries"
    __table_args__ = (UniqueConstraint("scope", "key"),)

    id: int | None = Field(default=None, primary_key=True)

    scope: str = Field(
        max_length=64,
        index=True,
        description="Session scope (token subject)",
    )

    key: str = Field(max_length=100)

    value: str = Field(description="JSON-serialized value")

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
