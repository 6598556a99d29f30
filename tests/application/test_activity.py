"""Tests for the activity recorder and the activity log query."""

from datetime import datetime, timedelta, timezone

import pytest

from labstock.application.activity import (
    RECENT_LIMIT,
    ActivityRecorder,
    ShowActivityHandler,
)
from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.exceptions import Forbidden, ValidationError
from labstock.domain.model.activity import LogAction, LogEntry
from labstock.domain.model.user import Role
from tests.fakes import FakeActivityLogRepository, make_user

ADMIN = make_user(Role.ADMIN, "Grace", "Hopper")
T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _entry(action: LogAction, user_id: str, minutes: int) -> LogEntry:
    return LogEntry(
        id=None,
        action=action,
        user_id=user_id,
        user_name=user_id,
        details=action.value,
        timestamp=T0 + timedelta(minutes=minutes),
    )


class TestActivityRecorder:

    def test_published_event_becomes_log_entry(self):
        log_repo = FakeActivityLogRepository()
        publisher = EventPublisher([ActivityRecorder(log_repo)])
        actor = make_user()

        publisher.publish(
            LifecycleEvent(
                action=LogAction.REQUEST_CREATE,
                actor=actor,
                details="Request created",
                metadata={"requestId": "r1"},
            )
        )

        [entry] = log_repo.entries
        assert entry.id is not None
        assert entry.action == LogAction.REQUEST_CREATE
        assert entry.user_id == "user-ada"
        assert entry.user_name == "Ada Lovelace"
        assert entry.metadata == {"requestId": "r1"}


class TestShowActivity:

    def _handler(self):
        log_repo = FakeActivityLogRepository()
        log_repo.append(_entry(LogAction.USER_LOGIN, "u1", 0))
        log_repo.append(_entry(LogAction.REQUEST_CREATE, "u1", 10))
        log_repo.append(_entry(LogAction.REQUEST_APPROVE, "u2", 20))
        return ShowActivityHandler(log_repo)

    def test_newest_first(self):
        entries = self._handler().handle(ADMIN)
        assert [e.action for e in entries] == [
            "REQUEST_APPROVE",
            "REQUEST_CREATE",
            "USER_LOGIN",
        ]

    def test_filter_by_user_and_action(self):
        handler = self._handler()
        assert len(handler.handle(ADMIN, user_id="u1")) == 2
        [only] = handler.handle(ADMIN, user_id="u1", action="REQUEST_CREATE")
        assert only.details == "REQUEST_CREATE"

    def test_date_range_is_inclusive(self):
        entries = self._handler().handle(
            ADMIN, start=T0 + timedelta(minutes=10), end=T0 + timedelta(minutes=20)
        )
        assert [e.action for e in entries] == ["REQUEST_APPROVE", "REQUEST_CREATE"]

    def test_limit(self):
        assert len(self._handler().handle(ADMIN, limit=1)) == 1

    def test_invalid_action(self):
        with pytest.raises(ValidationError, match="Invalid log action"):
            self._handler().handle(ADMIN, action="EXPLODE")

    def test_admin_only(self):
        with pytest.raises(Forbidden):
            self._handler().handle(make_user(Role.ADVISOR))

    def test_recent_caps_at_limit(self):
        log_repo = FakeActivityLogRepository()
        for i in range(RECENT_LIMIT + 5):
            log_repo.append(_entry(LogAction.USER_LOGIN, "u1", i))
        recent = ShowActivityHandler(log_repo).recent(ADMIN)
        assert len(recent) == RECENT_LIMIT
        assert recent[0].timestamp == (T0 + timedelta(minutes=RECENT_LIMIT + 4)).isoformat()
