"""Lifecycle events emitted after a state change has been committed.

Handlers never write to the activity log directly; they publish an event
once every mutation has been persisted, and subscribers (the activity
recorder in production, a recording list in tests) react to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from labstock.domain.model.activity import LogAction
from labstock.domain.model.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LifecycleEvent:
    action: LogAction
    actor: User
    details: str
    metadata: dict[str, Any] = field(default_factory=dict)


Subscriber = Callable[[LifecycleEvent], None]


class EventPublisher:
    """Synchronous fan-out to registered subscribers, in registration order."""

    def __init__(self, subscribers: list[Subscriber] | None = None) -> None:
        self._subscribers: list[Subscriber] = list(subscribers or [])

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def publish(self, event: LifecycleEvent) -> None:
        logger.debug("publishing %s for actor %s", event.action.value, event.actor.id)
        for subscriber in self._subscribers:
            # Post-commit: log a failing subscriber and keep fanning out.
            try:
                subscriber(event)
            except Exception:
                logger.exception(
                    "subscriber %r failed on %s", subscriber, event.action.value
                )
