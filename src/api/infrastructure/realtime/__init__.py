"""Real-time change feed backed by PostgreSQL LISTEN/NOTIFY."""

from infrastructure.realtime.postgres_change_feed import (
    PostgresChangeFeed,
    QueueSubscription,
)

__all__ = [
    "PostgresChangeFeed",
    "QueueSubscription",
]
