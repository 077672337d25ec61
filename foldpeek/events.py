"""Buffer-scoped event subscriptions and one-tick deferred work.

Both pieces are single-threaded: callbacks run on whichever loop calls
:meth:`EventHub.emit` or :meth:`TickScheduler.run_pending`, one at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .host import HostEvent

logger = logging.getLogger(__name__)


class EventSubscription:
    """Callback registered for a set of events on one buffer."""

    def __init__(
        self,
        events: Iterable[HostEvent],
        callback: Callable[[HostEvent], None],
        buffer: int,
        once: bool,
    ) -> None:
        self.events = frozenset(events)
        self.callback = callback
        self.buffer = buffer
        self.once = once
        self._active = True

    def active(self) -> bool:
        return self._active

    def deactivate(self) -> None:
        self._active = False

    def matches(self, event: HostEvent, buffer: int) -> bool:
        return self._active and buffer == self.buffer and event in self.events


class EventHub:
    """Dispatch table from host events to subscribed callbacks.

    A ``once`` subscription covering several events is removed as soon as any
    one of them fires.
    """

    def __init__(self) -> None:
        self._subscriptions: list[EventSubscription] = []

    def subscribe(
        self,
        events: Iterable[HostEvent],
        callback: Callable[[HostEvent], None],
        *,
        buffer: int,
        once: bool = False,
    ) -> EventSubscription:
        subscription = EventSubscription(events, callback, buffer, once)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: EventSubscription) -> None:
        subscription.deactivate()
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def emit(self, event: HostEvent, buffer: int) -> int:
        """Run callbacks subscribed to ``event`` on ``buffer``; return how many ran."""
        fired = 0
        for subscription in list(self._subscriptions):
            # An earlier callback may have unsubscribed this one.
            if not subscription.matches(event, buffer):
                continue
            if subscription.once:
                self.unsubscribe(subscription)
            fired += 1
            subscription.callback(event)
        return fired

    def subscription_count(self, buffer: int | None = None) -> int:
        if buffer is None:
            return len(self._subscriptions)
        return sum(1 for subscription in self._subscriptions if subscription.buffer == buffer)


class DeferredTask:
    """Callback scheduled for a later tick; may be cancelled until it runs."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._cancelled = False
        self._done = False

    def cancel(self) -> None:
        if not self._done:
            self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        return self._done

    def run(self) -> bool:
        if self._cancelled or self._done:
            return False
        self._done = True
        self._callback()
        return True


class TickScheduler:
    """Queue of work for the next turn of the host loop."""

    def __init__(self) -> None:
        self._queue: list[DeferredTask] = []

    def defer(self, callback: Callable[[], None]) -> DeferredTask:
        task = DeferredTask(callback)
        self._queue.append(task)
        return task

    def pending_count(self) -> int:
        return sum(1 for task in self._queue if not task.cancelled())

    def run_pending(self) -> int:
        """Run tasks queued before this call; work deferred meanwhile waits a tick."""
        queued, self._queue = self._queue, []
        ran = 0
        for task in queued:
            if task.run():
                ran += 1
        if ran:
            logger.debug("ran %d deferred task(s)", ran)
        return ran
