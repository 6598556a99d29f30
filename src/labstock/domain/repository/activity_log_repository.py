"""Abstract repository for the append-only activity log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from labstock.domain.model.activity import LogEntry, LogFilter


class ActivityLogRepository(ABC):

    @abstractmethod
    def append(self, entry: LogEntry) -> LogEntry:
        """Write one entry and return it with its assigned ID."""

    @abstractmethod
    def query(self, criteria: LogFilter | None = None) -> list[LogEntry]:
        """Return matching entries, newest first."""
