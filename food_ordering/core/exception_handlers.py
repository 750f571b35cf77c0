import logging
import uuid

from fastapi import FastAPI, Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from food_ordering.core.errors import AppError
from food_ordering.core.messages import GeneralMessages

log = logging.getLogger(__name__)


# Generate a clean request id for every response
def _rid():
    """Generates a unique request ID for tracing."""
    return uuid.uuid4().hex


def _error_body(code: str, message, details=None) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {
        "success": False,
        "error": error,
        "request_id": _rid(),
    }


# ----------- Exception Handlers (called by FastAPI) -----------

def app_error_handler(request: Request, exc: AppError):
    """Handles domain errors raised by services and dependencies."""
    if exc.status_code >= 500:
        log.error(f"{exc.__class__.__name__} on path {request.url.path}: {exc.message}")
    body = _error_body(exc.code, exc.message, jsonable_encoder(exc.details))
    return JSONResponse(status_code=exc.status_code, content=body)


def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., 404 for unknown routes)."""
    body = _error_body("http_error", exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles Pydantic validation errors; reported as 400 Bad Request."""
    body = _error_body(
        "validation_error",
        GeneralMessages.MISSING_REQUIRED_FIELDS,
        jsonable_encoder(exc.errors()),
    )
    return JSONResponse(status_code=400, content=body)


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    # Full traceback goes to the log, never to the client
    log.error(f"Unhandled exception on path: {request.url.path}", exc_info=exc)
    body = _error_body("server_error", GeneralMessages.INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=500, content=body)


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
