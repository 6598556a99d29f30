"""Activity log entries: the append-only audit trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class LogAction(Enum):
    USER_REGISTER = "USER_REGISTER"
    USER_LOGIN = "USER_LOGIN"
    INVENTORY_CREATE = "INVENTORY_CREATE"
    INVENTORY_UPDATE = "INVENTORY_UPDATE"
    INVENTORY_DELETE = "INVENTORY_DELETE"
    REQUEST_CREATE = "REQUEST_CREATE"
    REQUEST_APPROVE = "REQUEST_APPROVE"
    REQUEST_REJECT = "REQUEST_REJECT"
    REQUEST_CANCEL = "REQUEST_CANCEL"
    RETURN_INITIATE = "RETURN_INITIATE"
    RETURN_CONFIRM = "RETURN_CONFIRM"


@dataclass(frozen=True)
class LogEntry:
    """One audit record.  Never updated once written."""

    id: str | None
    action: LogAction
    user_id: str
    user_name: str
    details: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class LogFilter:
    """Criteria for querying the activity log.  Bounds are inclusive."""

    user_id: str | None = None
    action: LogAction | None = None
    start: datetime | None = None
    end: datetime | None = None

    def matches(self, entry: LogEntry) -> bool:
        if self.user_id is not None and entry.user_id != self.user_id:
            return False
        if self.action is not None and entry.action != self.action:
            return False
        if self.start is not None and entry.timestamp < self.start:
            return False
        if self.end is not None and entry.timestamp > self.end:
            return False
        return True
