"""
Application errors and their HTTP representations.

Routers raise these; the handlers registered by ``register_exception_handlers``
turn them into the JSON envelopes clients see.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Record not found."
INVALID_DATA_MESSAGE = "The given data was invalid."
SERVER_ERROR_MESSAGE = "Server Error"


class ValidationError(Exception):
    """Submitted data violated one or more field rules."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(INVALID_DATA_MESSAGE)
        self.errors = errors


class NotFoundError(Exception):
    """The requested record does not exist."""

    def __init__(self, model: str, record_id):
        super().__init__(f"{model} {record_id} not found")
        self.model = model
        self.record_id = record_id


class StoreUnavailable(Exception):
    """The database could not be reached."""


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=422,
        content={"message": INVALID_DATA_MESSAGE, "errors": exc.errors},
    )


async def not_found_handler(request: Request, exc: Exception):
    logger.debug("Not found: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": NOT_FOUND_MESSAGE},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return await not_found_handler(request, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Path parameters that fail to parse (``/customers/abc``) can never
    name a record, so they are reported the same way as a missing one.
    """
    if any(error.get("loc", ("",))[0] == "path" for error in exc.errors()):
        return await not_found_handler(request, exc)

    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value."))
    return await validation_error_handler(request, ValidationError(errors))


async def store_error_handler(request: Request, exc: Exception):
    logger.exception("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": SERVER_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API's error envelopes to ``app``."""
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreUnavailable, store_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
