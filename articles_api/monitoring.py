"""
Sentry reporting for server faults.

An event describes one failed request: a fresh id, the request's URL,
method and headers, a message taken from the underlying failure, and the
failure's exception chain with parsed stack frames.  Delivery is Sentry's
job: its HTTP transport queues events on a background worker, so a slow or
unreachable collector never holds up the client response.  Without a
``SENTRY_DSN`` no client is configured and events are dropped.
"""
import logging
import uuid
from typing import Any

import sentry_sdk
from sentry_sdk.transport import Transport
from sentry_sdk.utils import event_from_exception
from starlette.datastructures import Headers, URL
from starlette.types import Scope

from articles_api.config import settings
from articles_api.errors import AppError

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE = "Internal Server Error"


def init_monitoring(dsn: str | None = None, transport: Transport | None = None) -> None:
    """
    Configure the Sentry client.  Called once at application startup.

    Sentry's own integrations stay off: faults are reported by
    ``ErrorReportingMiddleware`` alone, and the logging integration would
    turn every error log line into a second event.
    """
    sentry_sdk.init(
        dsn=dsn if dsn is not None else settings.SENTRY_DSN,
        environment=settings.APP_ENV,
        release=settings.RELEASE,
        transport=transport,
        default_integrations=False,
        auto_enabling_integrations=False,
    )
    if is_enabled():
        logger.info("Sentry reporting enabled (environment=%s)", settings.APP_ENV)
    else:
        logger.info("No SENTRY_DSN configured, server faults will not be reported")


def is_enabled() -> bool:
    # A client without a transport (no DSN) accepts events and drops them.
    return sentry_sdk.get_client().transport is not None


def close_monitoring() -> None:
    """Deliver queued events, then shut the client down."""
    sentry_sdk.get_client().close(timeout=settings.SENTRY_FLUSH_TIMEOUT)


# ---------------------------------------------------------------------------
# Event construction
# ---------------------------------------------------------------------------

def _failure_of(error: BaseException | None) -> BaseException | None:
    # An AppError is only the classification; report what it wraps.
    if isinstance(error, AppError):
        return error.cause
    return error


def build_event(scope: Scope, error: BaseException | None = None) -> tuple[dict[str, Any], dict]:
    """
    Build a Sentry event and hint for the request described by *scope*.

    *error* is the ``AppError`` the handlers raised, or any exception that
    escaped them.  Without one the event still records the request, with
    the generic server-error message.
    """
    failure = _failure_of(error)
    hint: dict = {}
    event: dict[str, Any] = {}
    if failure is not None:
        event, hint = event_from_exception(
            failure, client_options=sentry_sdk.get_client().options
        )

    url = URL(scope=scope)
    event.update(
        event_id=uuid.uuid4().hex,
        level="error",
        logger=__name__,
        message=str(failure) if failure is not None else DEFAULT_MESSAGE,
        request={
            "url": str(url.replace(query="")),
            "query_string": url.query,
            "method": scope.get("method"),
            "headers": dict(Headers(scope=scope).items()),
        },
    )
    return event, hint


def capture_fault(scope: Scope, error: BaseException | None = None) -> str | None:
    """
    Hand an event for this request to Sentry and return its id, or None
    when no client is configured.
    """
    if not is_enabled():
        return None
    event, hint = build_event(scope, error)
    return sentry_sdk.capture_event(event, hint=hint)
