"""Translation of failed action results into HTTP errors."""

from __future__ import annotations

from typing import TypeVar

from fastapi import HTTPException

from shared_kernel.results import ActionResult

T = TypeVar("T")


def raise_for_failure(result: ActionResult[T]) -> T:
    """Return the result's data, or raise the matching HTTPException.

    Raises:
        HTTPException: 400/403/404/409/500 depending on the error code.
    """
    if not result.ok:
        raise HTTPException(status_code=result.http_status, detail=result.error)
    return result.data  # type: ignore[return-value]
