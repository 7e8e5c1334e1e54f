"""Row-level change events shared across bounded contexts."""

from shared_kernel.realtime.ports import ChangeFeed, ChangeSubscription
from shared_kernel.realtime.value_objects import (
    ChangeEvent,
    ChangeEventType,
    ChangeScope,
    InvalidChangeEventError,
)

__all__ = [
    "ChangeEvent",
    "ChangeEventType",
    "ChangeFeed",
    "ChangeScope",
    "ChangeSubscription",
    "InvalidChangeEventError",
]
