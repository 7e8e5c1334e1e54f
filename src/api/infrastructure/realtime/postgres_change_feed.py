"""PostgreSQL NOTIFY-based change feed.

Database triggers publish row changes as JSON envelopes on a NOTIFY
channel. A single listener per process receives them through
asyncpg-listen (which handles reconnection) and fans each event out to
the in-process subscribers whose scope matches.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from asyncpg_listen import (
    ListenPolicy,
    NotificationListener,
    NotificationOrTimeout,
    Timeout,
    connect_func,
)

from shared_kernel.realtime.observability import (
    ChangeFeedProbe,
    DefaultChangeFeedProbe,
)
from shared_kernel.realtime.value_objects import (
    ChangeEvent,
    ChangeScope,
    InvalidChangeEventError,
)


class QueueSubscription:
    """A subscription backed by a bounded asyncio queue.

    When the queue is full the oldest event is dropped; consumers that
    render snapshots recover on the next event.
    """

    def __init__(
        self,
        feed: PostgresChangeFeed,
        scope: ChangeScope,
        max_pending: int = 1000,
    ):
        self._feed = feed
        self.scope = scope
        self._queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(
            maxsize=max_pending
        )
        self._closed = False

    def deliver(self, event: ChangeEvent) -> bool:
        """Enqueue an event. Returns False if an older event was dropped."""
        dropped = False
        if self._queue.full():
            self._queue.get_nowait()
            dropped = True
        self._queue.put_nowait(event)
        return not dropped

    async def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        while not self._closed:
            event = await self._queue.get()
            if event is None:
                break
            yield event

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._feed._unsubscribe(self)
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(None)


class PostgresChangeFeed:
    """Change feed fed by PostgreSQL NOTIFY on a single channel."""

    def __init__(
        self,
        db_url: str,
        channel: str = "row_changes",
        probe: ChangeFeedProbe | None = None,
    ) -> None:
        self._db_url = db_url
        self._channel = channel
        self._probe = probe or DefaultChangeFeedProbe()
        self._subscriptions: set[QueueSubscription] = set()
        self._running = False
        self._listener_task: asyncio.Task[None] | None = None

    def subscribe(self, scope: ChangeScope) -> QueueSubscription:
        subscription = QueueSubscription(self, scope)
        self._subscriptions.add(subscription)
        return subscription

    def _unsubscribe(self, subscription: QueueSubscription) -> None:
        self._subscriptions.discard(subscription)

    def dispatch(self, event: ChangeEvent) -> int:
        """Deliver an event to every matching subscriber.

        Returns:
            Number of subscribers that received the event.
        """
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.scope.matches(event):
                continue
            if not subscription.deliver(event):
                self._probe.subscriber_overflow(event.table)
            delivered += 1
        self._probe.event_dispatched(event.table, event.event_type, delivered)
        return delivered

    async def handle_notification(self, notification: NotificationOrTimeout) -> None:
        """asyncpg-listen handler for the change channel."""
        if not self._running or isinstance(notification, Timeout):
            return
        if not notification.payload:
            return
        try:
            event = ChangeEvent.from_payload(notification.payload)
        except InvalidChangeEventError as e:
            self._probe.invalid_notification_ignored(notification.payload, str(e))
            return
        self.dispatch(event)

    async def start(self) -> None:
        """Start the background listener task."""
        if self._running:
            return
        self._running = True
        listener = NotificationListener(connect_func(self._db_url))
        self._listener_task = asyncio.create_task(self._run(listener))
        self._probe.feed_started(self._channel)

    async def _run(self, listener: NotificationListener) -> None:
        try:
            await listener.run(
                {self._channel: self.handle_notification},
                policy=ListenPolicy.ALL,
            )
        except asyncio.CancelledError:
            pass
        except Exception as e:
            self._probe.listener_error(str(e))

    async def stop(self) -> None:
        """Stop listening and close all subscriptions."""
        self._running = False
        if self._listener_task and not self._listener_task.done():
            self._listener_task.cancel()
            try:
                await self._listener_task
            except asyncio.CancelledError:
                pass
        for subscription in list(self._subscriptions):
            await subscription.close()
        self._probe.feed_stopped()
