"""ASGI middleware running the access gate on every HTTP request.

Tenant context headers supplied by the client are always stripped; on a
tenant-protected path the gate's resolved values are injected in their
place, so handlers can trust them.
"""

from __future__ import annotations

from collections.abc import Callable

from starlette.requests import Request
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from iam.application.access_gate import AccessGate, Redirect
from shared_kernel.middleware.tenant_context import TENANT_CONTEXT_HEADERS

_CONTEXT_HEADER_KEYS = frozenset(
    name.encode("latin-1") for name in TENANT_CONTEXT_HEADERS
)


class AccessGateMiddleware:
    """Runs `AccessGate.evaluate` before routing.

    Args:
        app: The wrapped ASGI application.
        gate_factory: Returns the gate; called per request so tests can
            swap it through dependency caches.
    """

    def __init__(self, app: ASGIApp, gate_factory: Callable[[], AccessGate]):
        self.app = app
        self._gate_factory = gate_factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        decision = await self._gate_factory().evaluate(
            request.url.path, request.cookies
        )

        if isinstance(decision, Redirect):
            response = RedirectResponse(decision.location, status_code=307)
            await response(scope, receive, send)
            return

        headers = [
            (key, value)
            for key, value in scope["headers"]
            if key.lower() not in _CONTEXT_HEADER_KEYS
        ]
        if decision.tenant is not None:
            headers.extend(
                (name.encode("latin-1"), value.encode("latin-1"))
                for name, value in decision.tenant.as_headers().items()
            )
        scope = dict(scope)
        scope["headers"] = headers
        scope.setdefault("state", {})["principal"] = decision.principal
        await self.app(scope, receive, send)
