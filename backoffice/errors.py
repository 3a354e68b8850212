"""Error values shared by validators and route handlers.

Validators return an ``ApiError`` instead of raising; route handlers check
the result and hand it to ``error_response``. Anything that escapes a
handler (store outages, constraint violations) is turned into a
``StoreError`` response by the application-level handlers below.
"""
from dataclasses import dataclass
from typing import TypeVar, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

T = TypeVar("T")


@dataclass(frozen=True)
class ApiError:
    message: str
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


@dataclass(frozen=True)
class ValidationError(ApiError):
    status_code: int = status.HTTP_400_BAD_REQUEST


@dataclass(frozen=True)
class NotFoundError(ApiError):
    status_code: int = status.HTTP_404_NOT_FOUND


@dataclass(frozen=True)
class StoreError(ApiError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


# a step either produces its value or one of the errors above
Result = Union[T, ApiError]


def is_error(value) -> bool:
    return isinstance(value, ApiError)


def error_response(error: ApiError) -> JSONResponse:
    if error.status_code >= 500:
        logger.error("{}: {}", type(error).__name__, error.message)
    else:
        logger.warning("{} ({}): {}", type(error).__name__, error.status_code, error.message)
    return JSONResponse({"error": error.message}, status_code=error.status_code)


def describe_errors(errors) -> str:
    """One message for a list of pydantic errors: the first one wins."""
    if not errors:
        return "Invalid request body"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    if first.get("type") == "json_invalid" or not field:
        return "Invalid request body"
    return f"Invalid {field}: {first.get('msg')}"


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(ValidationError(describe_errors(exc.errors())))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("{} {} failed in the store", request.method, request.url.path)
    orig = getattr(exc, "orig", None)
    return error_response(StoreError(str(orig if orig is not None else exc)))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("{} {} failed", request.method, request.url.path)
    return error_response(StoreError(str(exc) or "Internal Server Error"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
