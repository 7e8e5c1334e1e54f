"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources shared by every bounded
context. Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from infrastructure.database.engines import build_listen_dsn
from infrastructure.realtime import PostgresChangeFeed
from infrastructure.settings import get_database_settings


@lru_cache
def get_change_feed() -> PostgresChangeFeed:
    """Get the application-scoped change feed (singleton).

    Started and stopped by the application lifespan.
    """
    settings = get_database_settings()
    return PostgresChangeFeed(
        db_url=build_listen_dsn(settings),
        channel=settings.change_channel,
    )
