"""Domain probe for the change feed.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class ChangeFeedProbe(Protocol):
    """Domain probe for change feed lifecycle and delivery."""

    def feed_started(self, channel: str) -> None: ...

    def feed_stopped(self) -> None: ...

    def invalid_notification_ignored(self, payload: str, reason: str) -> None: ...

    def event_dispatched(
        self, table: str, event_type: str, subscribers: int
    ) -> None: ...

    def subscriber_overflow(self, table: str) -> None: ...

    def listener_error(self, error: str) -> None: ...


class DefaultChangeFeedProbe:
    """Default implementation of ChangeFeedProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def feed_started(self, channel: str) -> None:
        self._logger.info("change_feed_started", channel=channel)

    def feed_stopped(self) -> None:
        self._logger.info("change_feed_stopped")

    def invalid_notification_ignored(self, payload: str, reason: str) -> None:
        self._logger.warning(
            "change_feed_invalid_notification",
            payload=payload[:200],
            reason=reason,
        )

    def event_dispatched(self, table: str, event_type: str, subscribers: int) -> None:
        self._logger.debug(
            "change_feed_event_dispatched",
            table=table,
            event_type=event_type,
            subscribers=subscribers,
        )

    def subscriber_overflow(self, table: str) -> None:
        """Record that a slow subscriber dropped an event."""
        self._logger.warning("change_feed_subscriber_overflow", table=table)

    def listener_error(self, error: str) -> None:
        self._logger.error("change_feed_listener_error", error=error)
