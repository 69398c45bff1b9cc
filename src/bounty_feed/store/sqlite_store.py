"""SQLite-backed curation repository."""

import json
import sqlite3
from pathlib import Path
from typing import Optional

from bounty_feed.models.record import CanonicalRecord, SearchOptions

from .base import CuratedRecord, CurationRepository, CurationStatus, SavedSearch, apply_update


class SqliteCurationStore(CurationRepository):
    """
    SQLite store for curated records and saved searches.
    Records are stored as JSON alongside indexed tenant/status columns.
    """

    def __init__(self, db_path: str | Path = "bounty_feed.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def _deserialize_curated(self, row: sqlite3.Row) -> CuratedRecord:
        return CuratedRecord(
            id=row["id"],
            tenant_id=row["tenant_id"],
            record=CanonicalRecord.model_validate(json.loads(row["data"])),
            status=row["status"],
            notes=row["notes"],
            custom_reward=row["custom_reward"],
            added_at=row["added_at"],
            approved_at=row["approved_at"],
        )

    def _deserialize_search(self, row: sqlite3.Row) -> SavedSearch:
        return SavedSearch(
            id=row["id"],
            tenant_id=row["tenant_id"],
            query=row["query"],
            sources=json.loads(row["sources"]),
            options=SearchOptions.model_validate(json.loads(row["options"])),
            created_at=row["created_at"],
            last_run=row["last_run"],
        )

    def add(self, tenant_id: str, record: CanonicalRecord, status: CurationStatus = "pending") -> CuratedRecord:
        """Insert a curated copy of record."""
        curated = apply_update(CuratedRecord(tenant_id=tenant_id, record=record), status, None, None)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO curated_records
                    (id, tenant_id, record_id, source, status, notes, custom_reward, data, added_at, approved_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    curated.id,
                    tenant_id,
                    record.id,
                    record.source,
                    curated.status,
                    curated.notes,
                    curated.custom_reward,
                    json.dumps(record.model_dump(mode="json"), default=str),
                    curated.added_at,
                    curated.approved_at,
                ),
            )
            conn.commit()
        return curated

    def get(self, curated_id: str) -> Optional[CuratedRecord]:
        """Get single curated record by id."""
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM curated_records WHERE id = ?", (curated_id,)).fetchone()
        return self._deserialize_curated(row) if row else None

    def list_curated(self, tenant_id: str, status: Optional[CurationStatus] = None) -> list[CuratedRecord]:
        """Tenant's records, newest first."""
        sql = "SELECT * FROM curated_records WHERE tenant_id = ?"
        params: tuple = (tenant_id,)
        if status:
            sql += " AND status = ?"
            params += (status,)
        sql += " ORDER BY added_at DESC, rowid DESC"
        with self._connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._deserialize_curated(r) for r in rows]

    def update(
        self,
        curated_id: str,
        *,
        status: Optional[CurationStatus] = None,
        notes: Optional[str] = None,
        custom_reward: Optional[str] = None,
    ) -> Optional[CuratedRecord]:
        """Update status/notes/reward. Returns None for unknown ids."""
        existing = self.get(curated_id)
        if existing is None:
            return None
        updated = apply_update(existing, status, notes, custom_reward)
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE curated_records SET status = ?, notes = ?, custom_reward = ?, approved_at = ?
                WHERE id = ?
                """,
                (updated.status, updated.notes, updated.custom_reward, updated.approved_at, curated_id),
            )
            conn.commit()
        return updated

    def delete(self, curated_id: str) -> bool:
        with self._connection() as conn:
            cursor = conn.execute("DELETE FROM curated_records WHERE id = ?", (curated_id,))
            conn.commit()
        return cursor.rowcount > 0

    def save_search(self, search: SavedSearch) -> SavedSearch:
        """Insert or replace a saved search."""
        with self._connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO saved_searches (id, tenant_id, query, sources, options, created_at, last_run)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    search.id,
                    search.tenant_id,
                    search.query,
                    json.dumps(search.sources),
                    json.dumps(search.options.model_dump(mode="json")),
                    search.created_at,
                    search.last_run,
                ),
            )
            conn.commit()
        return search

    def list_searches(self, tenant_id: str) -> list[SavedSearch]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM saved_searches WHERE tenant_id = ? ORDER BY created_at DESC, rowid DESC",
                (tenant_id,),
            ).fetchall()
        return [self._deserialize_search(r) for r in rows]
