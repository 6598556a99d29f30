"""JSON-file-backed implementation of ActivityLogRepository.

Entries are only ever appended.  Each append is a single atomic
rewrite of the collection file.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from labstock.domain.model.activity import LogAction, LogEntry, LogFilter
from labstock.domain.repository.activity_log_repository import ActivityLogRepository
from labstock.infrastructure.persistence.json_record_store import JsonRecordStore
from labstock.infrastructure.persistence.timestamps import from_iso, to_iso

COLLECTION = "logs"


class JsonActivityLogRepository(ActivityLogRepository):

    def __init__(self, store: JsonRecordStore) -> None:
        self._store = store

    def append(self, entry: LogEntry) -> LogEntry:
        stored = self._store.create(
            COLLECTION,
            {
                "action": entry.action.value,
                "userId": entry.user_id,
                "userName": entry.user_name,
                "details": entry.details,
                "metadata": entry.metadata or None,
                "timestamp": to_iso(entry.timestamp),
            },
        )
        return replace(entry, id=stored["id"])

    def query(self, criteria: LogFilter | None = None) -> list[LogEntry]:
        entries = [self._to_domain(raw) for raw in self._store.read_all(COLLECTION)]
        if criteria is not None:
            entries = [e for e in entries if criteria.matches(e)]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries

    @staticmethod
    def _to_domain(raw: dict) -> LogEntry:
        return LogEntry(
            id=raw["id"],
            action=LogAction(raw["action"]),
            user_id=raw.get("userId", ""),
            user_name=raw.get("userName", ""),
            details=raw.get("details", ""),
            metadata=raw.get("metadata") or {},
            timestamp=from_iso(raw.get("timestamp")) or datetime.now(timezone.utc),
        )
