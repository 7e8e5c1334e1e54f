"""Unit tests for the in-process fan-out of the PostgreSQL change feed.

The NOTIFY listener itself is not started; notifications are handed to
the feed directly.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from asyncpg_listen import Notification, Timeout

from infrastructure.realtime import PostgresChangeFeed, QueueSubscription
from shared_kernel.realtime import ChangeEvent, ChangeEventType, ChangeScope


def candidate_event(job_id: str, version: int = 2) -> ChangeEvent:
    return ChangeEvent(
        table="job_candidates",
        event_type=ChangeEventType.UPDATE,
        new={"id": "jc-1", "job_id": job_id, "version": version},
    )


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def feed(mock_probe) -> PostgresChangeFeed:
    return PostgresChangeFeed(db_url="postgresql://localhost/x", probe=mock_probe)


class TestDispatch:
    def test_only_matching_scopes_receive(self, feed):
        job_a = feed.subscribe(ChangeScope("job_candidates", "job_id", "job-a"))
        job_b = feed.subscribe(ChangeScope("job_candidates", "job_id", "job-b"))

        delivered = feed.dispatch(candidate_event("job-a"))

        assert delivered == 1
        assert job_a._queue.qsize() == 1
        assert job_b._queue.qsize() == 0

    def test_other_tables_are_ignored(self, feed):
        subscription = feed.subscribe(ChangeScope("members", "job_id", "job-a"))

        assert feed.dispatch(candidate_event("job-a")) == 0
        assert subscription._queue.qsize() == 0

    def test_overflow_drops_oldest(self, feed, mock_probe):
        subscription = QueueSubscription(
            feed, ChangeScope("job_candidates", "job_id", "job-a"), max_pending=2
        )
        feed._subscriptions.add(subscription)

        for version in (1, 2, 3):
            feed.dispatch(candidate_event("job-a", version=version))

        versions = [subscription._queue.get_nowait().new["version"] for _ in range(2)]
        assert versions == [2, 3]
        mock_probe.subscriber_overflow.assert_called_once_with("job_candidates")

    @pytest.mark.asyncio
    async def test_closed_subscription_stops_receiving(self, feed):
        subscription = feed.subscribe(ChangeScope("job_candidates", "job_id", "job-a"))

        await subscription.close()

        assert feed.dispatch(candidate_event("job-a")) == 0


class TestHandleNotification:
    @pytest.mark.asyncio
    async def test_valid_payload_is_dispatched(self, feed):
        feed._running = True
        subscription = feed.subscribe(ChangeScope("job_candidates", "job_id", "job-a"))
        payload = json.dumps(
            {
                "table": "job_candidates",
                "event_type": "insert",
                "old": None,
                "new": {"id": "jc-1", "job_id": "job-a", "version": 1},
            }
        )

        await feed.handle_notification(Notification("row_changes", payload))

        event = subscription._queue.get_nowait()
        assert event.event_type == ChangeEventType.INSERT

    @pytest.mark.asyncio
    async def test_invalid_payload_is_reported(self, feed, mock_probe):
        feed._running = True

        await feed.handle_notification(Notification("row_changes", "{oops"))

        mock_probe.invalid_notification_ignored.assert_called_once()

    @pytest.mark.asyncio
    async def test_timeouts_and_stopped_feed_are_ignored(self, feed, mock_probe):
        await feed.handle_notification(Notification("row_changes", "{}"))
        feed._running = True
        await feed.handle_notification(Timeout("row_changes"))

        mock_probe.invalid_notification_ignored.assert_not_called()
        mock_probe.event_dispatched.assert_not_called()


class TestSubscriptionIteration:
    @pytest.mark.asyncio
    async def test_iteration_ends_on_close(self, feed):
        subscription = feed.subscribe(ChangeScope("job_candidates", "job_id", "job-a"))
        feed.dispatch(candidate_event("job-a"))

        received = []

        async def consume():
            async for event in subscription:
                received.append(event)

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        await subscription.close()
        await asyncio.wait_for(task, timeout=1)

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_stop_closes_subscriptions(self, feed, mock_probe):
        feed.subscribe(ChangeScope("job_candidates", "job_id", "job-a"))

        await feed.stop()

        assert feed._subscriptions == set()
        mock_probe.feed_stopped.assert_called_once()
