"""Application services for the activity log.

``ActivityRecorder`` is the lifecycle-event subscriber that writes the
audit trail.  ``ShowActivityHandler`` is the admin query over it.
"""

from __future__ import annotations

from datetime import datetime

from labstock.application.dto import LogEntryDTO
from labstock.domain.events import LifecycleEvent
from labstock.domain.exceptions import Forbidden, ValidationError
from labstock.domain.model.activity import LogAction, LogEntry, LogFilter
from labstock.domain.model.user import User
from labstock.domain.repository.activity_log_repository import ActivityLogRepository

RECENT_LIMIT = 50


class ActivityRecorder:

    def __init__(self, log_repo: ActivityLogRepository) -> None:
        self._log_repo = log_repo

    def __call__(self, event: LifecycleEvent) -> None:
        self._log_repo.append(
            LogEntry(
                id=None,
                action=event.action,
                user_id=event.actor.id,  # type: ignore[arg-type]
                user_name=event.actor.display_name,
                details=event.details,
                metadata=dict(event.metadata),
            )
        )


class ShowActivityHandler:

    def __init__(self, log_repo: ActivityLogRepository) -> None:
        self._log_repo = log_repo

    def handle(
        self,
        actor: User,
        user_id: str | None = None,
        action: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = None,
    ) -> list[LogEntryDTO]:
        """Return matching entries, newest first."""
        if not actor.is_admin:
            raise Forbidden("Only admins can view the activity log")

        parsed_action: LogAction | None = None
        if action:
            try:
                parsed_action = LogAction(action)
            except ValueError as exc:
                raise ValidationError(f"Invalid log action: {action!r}") from exc

        entries = self._log_repo.query(
            LogFilter(user_id=user_id, action=parsed_action, start=start, end=end)
        )
        if limit is not None:
            entries = entries[:limit]
        return [LogEntryDTO.from_domain(e) for e in entries]

    def recent(self, actor: User) -> list[LogEntryDTO]:
        return self.handle(actor, limit=RECENT_LIMIT)
