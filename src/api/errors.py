"""Exception handlers producing the {"error": message} envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.exceptions import TrustMeError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_validation_errors(errors: list[dict]) -> str:
    """Summarize pydantic errors as "field: message; field: message"."""
    parts = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(location)
        message = error.get("msg", "Invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "Validation error"


async def trustme_error_handler(request: Request, exc: TrustMeError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.message, headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Not found"
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_errors(exc.errors()))


async def model_validation_handler(request: Request, exc: ValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_errors(exc.errors()))


def register_error_handlers(app: FastAPI, expose_details: bool) -> None:
    """Attach all handlers; 500 details are only exposed when asked to."""

    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        message = str(exc) if expose_details else "Internal server error"
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    app.add_exception_handler(TrustMeError, trustme_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
