import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from blogful.config import settings

access_logger = logging.getLogger("blogful.access")

# ---------------------------------------------------------------------------
# Per-request context variable
# ---------------------------------------------------------------------------

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """
    Register a ``before_cursor_execute`` event listener on *engine* that
    increments the per-request ``query_count_var`` for every SQL statement.

    Must be called once per engine (production engine in ``database.py``,
    test engine in ``conftest.py``).
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class AccessLogMiddleware:
    """
    Pure ASGI middleware that writes one access-log line per HTTP request
    and adds an ``X-Response-Time-Ms`` header.

    Production gets a terse ``METHOD path status ms`` line.  Other
    environments get a common-log style line that also carries the client
    address, HTTP version, and the number of SQL statements the request
    executed.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            self._log(scope, status_code, round((time.perf_counter() - start) * 1000, 2))

    @staticmethod
    def _log(scope: Scope, status_code: int, duration_ms: float) -> None:
        method = scope.get("method", "-")
        path = scope.get("path", "-")
        if scope.get("query_string"):
            path = f"{path}?{scope['query_string'].decode('latin-1')}"

        if settings.is_production:
            access_logger.info("%s %s %d %.2f ms", method, path, status_code, duration_ms)
            return

        client = scope.get("client")
        host = client[0] if client else "-"
        access_logger.info(
            '%s "%s %s HTTP/%s" %d %.2f ms queries=%d',
            host,
            method,
            path,
            scope.get("http_version", "1.1"),
            status_code,
            duration_ms,
            query_count_var.get(),
        )


SECURITY_HEADERS: list[tuple[bytes, bytes]] = [
    (b"x-content-type-options", b"nosniff"),
    (b"x-frame-options", b"SAMEORIGIN"),
    (b"x-dns-prefetch-control", b"off"),
    (b"x-download-options", b"noopen"),
    (b"x-permitted-cross-domain-policies", b"none"),
    (b"x-xss-protection", b"0"),
    (b"referrer-policy", b"no-referrer"),
    (b"strict-transport-security", b"max-age=15552000; includeSubDomains"),
    (b"cross-origin-opener-policy", b"same-origin"),
    (b"cross-origin-resource-policy", b"same-origin"),
    (b"origin-agent-cluster", b"?1"),
]


class SecurityHeadersMiddleware:
    """
    Pure ASGI middleware that stamps a fixed set of hardening headers on
    every HTTP response.  Headers already set by the application win.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in SECURITY_HEADERS if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)


class ErrorResponderMiddleware:
    """
    Pure ASGI middleware that turns an uncaught exception into the JSON 500
    produced by *handler*.

    Installed innermost, so the 500 still passes back through the CORS,
    security-header and access-log layers.  An exception raised after the
    response has started is re-raised untouched.
    """

    def __init__(self, app: ASGIApp, handler) -> None:
        self.app = app
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if started:
                raise
            response = await self.handler(Request(scope), exc)
            await response(scope, receive, send)
