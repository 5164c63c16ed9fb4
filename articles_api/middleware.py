import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from articles_api.monitoring import capture_fault

logger = logging.getLogger(__name__)

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
# Middleware (pure ASGI — avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class RequestTracingMiddleware:
    """
    Pure ASGI middleware that traces every HTTP request in the log:
    entry, successful completion (status, duration, SQL query count) and
    failure completion when the application raises.

    It also adds two diagnostic response headers:

    - ``X-Response-Time-Ms``: wall-clock time for the entire request.
    - ``X-Query-Count``: total SQL queries executed during the request,
      counted via the SQLAlchemy engine event registered by
      ``install_query_counter``.

    Unlike ``BaseHTTPMiddleware``, this does NOT spawn a child asyncio
    task for the inner application, so ``ContextVar`` mutations are
    visible when we read the counter after the response has been sent.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method, path = scope["method"], scope["path"]
        status_code = 500
        query_count_var.set(0)
        start = time.perf_counter()
        logger.info("--> %s %s", method, path)

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(query_count_var.get()).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception(
                "<-x %s %s failed after %.2fms",
                method, path, (time.perf_counter() - start) * 1000,
            )
            raise
        logger.info(
            "<-- %s %s %d in %.2fms (%d queries)",
            method, path, status_code,
            (time.perf_counter() - start) * 1000, query_count_var.get(),
        )


class ErrorReportingMiddleware:
    """
    Pure ASGI middleware that reports server faults to Sentry.

    A response with a 5xx status, or an exception escaping the
    application, produces one monitoring event.  The failure detail comes
    from the ``AppError`` the exception handler left on ``request.state``,
    or from the escaping exception.  The event is handed to Sentry only
    after the response has gone out; its transport delivers in the background.
    Success responses pass through untouched.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        status_code: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self._report(scope, exc)
            raise

        if status_code is not None and status_code >= 500:
            self._report(scope, scope.get("state", {}).get("app_error"))

    def _report(self, scope: Scope, error: BaseException | None) -> None:
        event_id = capture_fault(scope, error)
        if event_id is None:
            logger.warning("Server fault on %s %s not reported", scope["method"], scope["path"])
            return
        logger.error(
            "Reported server fault on %s %s as event %s",
            scope["method"], scope["path"], event_id,
        )
