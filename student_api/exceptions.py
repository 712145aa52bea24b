import logging
from typing import Any, Optional

from fastapi import HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, details: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)
        self.details = details


class ValidationError(APIException):
    status_code = 400
    default_detail = "All required fields must be provided."


class AuthError(APIException):
    status_code = 401
    default_detail = "Unauthorized: Token required"


class InvalidOTP(AuthError):
    default_detail = "Invalid OTP"


class ExpiredOrInvalid(AuthError):
    status_code = 403
    default_detail = "Invalid or expired token"


class Conflict(APIException):
    status_code = 409
    default_detail = "Student with this phone or email already exists"


class DeliveryError(APIException):
    status_code = 500
    default_detail = "Failed to send OTP"


class StoreError(APIException):
    status_code = 500
    default_detail = "Database error"


class ConfigurationError(Exception):
    """Raised at startup when required configuration is absent."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


def create_error_response(error_message: str, details: Optional[Any] = None) -> dict:
    """Create a standardized error response"""
    body = {"success": False, "error": error_message}
    if details is not None:
        body["details"] = details
    return body


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON and wrong field types share the 400 envelope with missing fields
    return JSONResponse(
        status_code=400,
        content=create_error_response("Invalid request body", [e.get("msg") for e in exc.errors()]),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=create_error_response("Internal server error"))
