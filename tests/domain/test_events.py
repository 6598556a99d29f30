"""Unit tests for lifecycle event fan-out and log filtering."""

from datetime import datetime, timedelta, timezone

from labstock.domain.events import EventPublisher, LifecycleEvent
from labstock.domain.model.activity import LogAction, LogEntry, LogFilter
from tests.fakes import RecordingSubscriber, make_user


class TestEventPublisher:

    def test_delivers_to_every_subscriber_in_order(self):
        calls = []
        publisher = EventPublisher([lambda e: calls.append(("first", e.action))])
        publisher.subscribe(lambda e: calls.append(("second", e.action)))

        publisher.publish(LifecycleEvent(LogAction.REQUEST_CREATE, make_user(), "created"))

        assert calls == [
            ("first", LogAction.REQUEST_CREATE),
            ("second", LogAction.REQUEST_CREATE),
        ]

    def test_no_subscribers_is_fine(self):
        EventPublisher().publish(LifecycleEvent(LogAction.USER_LOGIN, make_user(), "hi"))

    def test_recording_subscriber(self):
        recorder = RecordingSubscriber()
        EventPublisher([recorder]).publish(
            LifecycleEvent(LogAction.RETURN_CONFIRM, make_user(), "back")
        )
        assert recorder.actions == ["RETURN_CONFIRM"]

    def test_failing_subscriber_does_not_stop_the_rest(self):
        def broken(event):
            raise OSError("logs.json is read-only")

        recorder = RecordingSubscriber()
        EventPublisher([broken, recorder]).publish(
            LifecycleEvent(LogAction.REQUEST_APPROVE, make_user(), "approved")
        )
        assert recorder.actions == ["REQUEST_APPROVE"]


def _entry(action: LogAction, user_id: str, minutes_ago: int) -> LogEntry:
    return LogEntry(
        id=None,
        action=action,
        user_id=user_id,
        user_name="x",
        details="",
        timestamp=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago),
    )


class TestLogFilter:

    def test_empty_filter_matches_everything(self):
        assert LogFilter().matches(_entry(LogAction.USER_LOGIN, "u1", 0))

    def test_user_and_action(self):
        criteria = LogFilter(user_id="u1", action=LogAction.REQUEST_APPROVE)
        assert criteria.matches(_entry(LogAction.REQUEST_APPROVE, "u1", 0))
        assert not criteria.matches(_entry(LogAction.REQUEST_APPROVE, "u2", 0))
        assert not criteria.matches(_entry(LogAction.REQUEST_REJECT, "u1", 0))

    def test_time_bounds_are_inclusive(self):
        noon = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        criteria = LogFilter(start=noon - timedelta(minutes=10), end=noon)
        assert criteria.matches(_entry(LogAction.USER_LOGIN, "u1", 10))
        assert criteria.matches(_entry(LogAction.USER_LOGIN, "u1", 0))
        assert not criteria.matches(_entry(LogAction.USER_LOGIN, "u1", 11))
