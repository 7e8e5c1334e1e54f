"""Ports for subscribing to row-level change events."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from shared_kernel.realtime.value_objects import ChangeEvent, ChangeScope


@runtime_checkable
class ChangeSubscription(Protocol):
    """A live subscription; iterate to receive matching events."""

    def __aiter__(self) -> AsyncIterator[ChangeEvent]: ...

    async def close(self) -> None:
        """Stop receiving events and release the subscription."""
        ...


@runtime_checkable
class ChangeFeed(Protocol):
    """Fan-out of database change events to in-process subscribers."""

    def subscribe(self, scope: ChangeScope) -> ChangeSubscription:
        """Register interest in events matching `scope`."""
        ...
