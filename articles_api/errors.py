"""
Error taxonomy and its rendering to HTTP responses.

Repositories raise ``DataAccessError`` for any store fault.  Handlers
classify every outcome into one of the two ``AppErrorKind`` members and
raise ``AppError``; the exception handlers registered here are the only
place an error becomes a status code and a JSON body.  Bodies are fixed
per kind and never carry failure detail; the detail travels on the
exception to the monitoring pipeline instead.
"""
import logging
from enum import Enum
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppErrorKind(Enum):
    """
    Closed set of client-visible error kinds.

    Each member carries its own status code and message, so a kind cannot
    exist without a rendering.
    """

    NOT_FOUND = (status.HTTP_404_NOT_FOUND, "Not Found")
    INTERNAL_SERVER_ERROR = (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message

    @property
    def code(self) -> str:
        return self.name


class AppError(Exception):
    """
    Typed error raised by the resource handlers.

    ``cause`` holds the underlying failure, if any.  It is reported to
    Sentry and never rendered to the client.
    """

    def __init__(self, kind: AppErrorKind, cause: BaseException | None = None) -> None:
        self.kind = kind
        self.cause = cause
        super().__init__(f"{kind.message}: {cause}" if cause is not None else kind.message)

    @classmethod
    def not_found(cls) -> "AppError":
        return cls(AppErrorKind.NOT_FOUND)

    @classmethod
    def internal_server_error(cls, cause: BaseException) -> "AppError":
        return cls(AppErrorKind.INTERNAL_SERVER_ERROR, cause)

    @property
    def is_server_fault(self) -> bool:
        return self.kind is AppErrorKind.INTERNAL_SERVER_ERROR

    def render(self) -> JSONResponse:
        return error_response(self.kind.status_code, self.kind.code, self.kind.message)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.is_server_fault:
        # Picked up by ErrorReportingMiddleware once the response is out.
        request.state.app_error = exc
        logger.error("AppError on %s %s: %s", request.method, request.url.path, exc.cause)
    else:
        logger.info("%s on %s %s", exc.kind.code, request.method, request.url.path)
    return exc.render()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request %s %s: %s", request.method, request.url.path, exc.errors())
    # A path id that cannot be an id at all names no resource.
    if any(error["loc"][0] == "path" for error in exc.errors()):
        return AppError.not_found().render()
    return error_response(status.HTTP_400_BAD_REQUEST, "BAD_REQUEST", "Bad Request")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return AppError.not_found().render()
    phrase = HTTPStatus(exc.status_code)
    response = error_response(exc.status_code, phrase.name, phrase.phrase)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return AppError.internal_server_error(exc).render()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
