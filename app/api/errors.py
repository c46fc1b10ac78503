import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import schemas


"""Error types and JSON exception handlers. - errors

Every failure response carries ``success: false``. Body validation errors
are reported as a 400 list of failing fields; other failures carry a single
message and, for store failures, the underlying error text.
"""

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failure to be returned to the client as an ErrorResponse. - api_error"""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error


def _field_error(err: Dict[str, Any]) -> schemas.FieldError:
    """Turn one pydantic error into a FieldError. - field_error"""
    loc = list(err.get("loc", ()))
    location = str(loc[0]) if loc else "body"
    field = location
    # json_invalid carries a character offset, not a field name
    if len(loc) > 1 and isinstance(loc[1], str) and err.get("type") != "json_invalid":
        field = loc[1]

    message = err.get("msg", "Invalid value")
    if err.get("type") != "string_too_long":
        message = schemas.FIELD_MESSAGES.get(field, message)
    return schemas.FieldError(field=field, message=message, location=location)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    body = schemas.ErrorResponse(message=exc.message, error=exc.error)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_field_error(err) for err in exc.errors()]
    body = schemas.ValidationErrorResponse(errors=errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = schemas.ErrorResponse(message="Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the app. - register_exception_handlers"""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
