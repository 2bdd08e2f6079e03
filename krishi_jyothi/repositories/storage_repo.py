# krishi_jyothi/repositories/storage_repo.py
from datetime import datetime, timezone

from sqlmodel import Session, select

from krishi_jyothi.models.storage import StorageEntry


class StorageRepository:
    """
    Data access layer for StorageEntry.

    - Pure DB operations keyed by (scope, key).
    - No FastAPI, no JSON handling.
    """

    def get(
        self,
        session: Session,
        scope: str,
        key: str,
        for_update: bool = False,
    ) -> StorageEntry | None:
        # Reload even if cached: other sessions may have written the row
        stmt = (
            select(StorageEntry)
            .where(StorageEntry.scope == scope, StorageEntry.key == key)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return session.exec(stmt).first()

    def upsert(self, session: Session, scope: str, key: str, value: str) -> StorageEntry:
        entry = self.get(session, scope, key)
        if entry is None:
            entry = StorageEntry(scope=scope, key=key, value=value)
        else:
            entry.value = value
            entry.updated_at = datetime.now(timezone.utc)
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    def delete(self, session: Session, scope: str, key: str) -> None:
        entry = self.get(session, scope, key)
        if entry is not None:
            session.delete(entry)
            session.commit()

