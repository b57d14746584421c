"""HTTP-facing errors and the handlers that render them as ``{code, message}``."""

import logging
from typing import TypeVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from radio_api.core.response import ApiResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AppException(Exception):
    """Base for every error the API turns into a JSON error body.

    Subclasses set ``status_code`` and ``code`` as class defaults; both can be
    overridden per instance.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class BadRequestError(AppException):
    status_code = 400
    code = "INVALID_REQUEST"


class UnauthorizedError(AppException):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(AppException):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str | None = None):
        super().__init__(f"{entity} '{entity_id}' not found" if entity_id else f"{entity} not found")


class UpstreamError(AppException):
    """Vendor failure carried out of an ApiResult. Non-error statuses become 500."""

    def __init__(self, message: str, status_code: int, code: str):
        super().__init__(message, status_code if status_code >= 400 else 500, code)


def unwrap(result: ApiResult[T], code: str, fallback: str) -> T:
    """Payload of a successful result; otherwise raise with the result's status code."""
    if not result.success or result.data is None:
        raise UpstreamError(result.error or fallback, result.status_code, code)
    return result.data


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_response(
    status_code: int, code: str, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"code": code, "message": message}, headers=headers
    )


_STATUS_CODES = {
    400: "INVALID_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _code_for_status(status_code: int) -> str:
    if status_code in _STATUS_CODES:
        return _STATUS_CODES[status_code]
    return "INTERNAL_ERROR" if status_code >= 500 else "HTTP_ERROR"


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return _error_response(exc.status_code, exc.code, exc.message)

    # Malformed bodies are client errors, reported as 400 rather than FastAPI's 422
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(400, "INVALID_REQUEST", _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(
            exc.status_code, _code_for_status(exc.status_code), str(exc.detail), exc.headers
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
