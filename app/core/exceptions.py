"""
Exception handlers for the HR Management API.

Service-layer exceptions are translated into the standard error envelope
here; routes never build error responses themselves.
"""

from typing import Any, Dict, List, Type, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import get_logger
from app.schemas.common.response import ErrorDetail, ErrorResponse
from app.services.common import errors

logger = get_logger(__name__)

# Most specific classes first; lookup walks the MRO of the raised error.
STATUS_BY_ERROR: Dict[Type[errors.ServiceError], int] = {
    errors.ValidationError: status.HTTP_400_BAD_REQUEST,
    errors.ConflictError: status.HTTP_400_BAD_REQUEST,
    errors.AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    errors.AuthorizationError: status.HTTP_403_FORBIDDEN,
    errors.NotFoundError: status.HTTP_404_NOT_FOUND,
    errors.InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for(exc: errors.ServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: List[ErrorDetail] = None,
    headers: Dict[str, str] = None,
) -> JSONResponse:
    body = ErrorResponse.create(message=message, error_code=error_code, errors=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def service_error_handler(request: Request, exc: errors.ServiceError) -> JSONResponse:
    status_code = status_for(exc)
    context: Dict[str, Any] = {
        "method": request.method,
        "url": str(request.url.path),
        "error_type": type(exc).__name__,
    }

    if status_code >= 500:
        logger.error(f"Service failure: {exc.message}", extra=context)
        return error_response(status_code, INTERNAL_ERROR_MESSAGE, errors.InternalError.__name__)

    logger.info(exc.message, extra=context)

    details = None
    if isinstance(exc, errors.ValidationError) and exc.field:
        details = [ErrorDetail(field=exc.field, message=exc.message)]

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return error_response(status_code, exc.message, type(exc).__name__, details, headers)


async def request_validation_handler(
    request: Request,
    exc: Union[RequestValidationError, SchemaValidationError],
) -> JSONResponse:
    # Request errors are located as ("body" | "query" | "path", field, ...);
    # schemas built inside dependencies report bare field paths.
    skip = 1 if isinstance(exc, RequestValidationError) else 0
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())[skip:]]
        details.append(ErrorDetail(field=".".join(loc) or None, message=err.get("msg", "Invalid value")))

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "ValidationError",
        details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        "HTTPException",
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"method": request.method, "url": str(request.url.path)},
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        errors.InternalError.__name__,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(errors.ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SchemaValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "STATUS_BY_ERROR",
    "status_for",
    "register_exception_handlers",
]
