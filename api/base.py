"""Error body format and error codes shared by every HTTP surface."""

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse


class ErrorBody(BaseModel):
    """
    Body of every non-2xx response.

    message is safe to show a storefront visitor; code is for programs.
    """

    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")


def error_response(code: str, message: str) -> ErrorBody:
    """Create an error body."""
    return ErrorBody(message=message, code=code)


def error_json(
    status_code: int,
    code: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create an error body wrapped in a JSONResponse."""
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=error_response(code, message).model_dump(mode="json"),
    )


class ErrorCodes:
    """Standard error codes for consistent error handling."""

    # Authentication & Authorization
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    INVALID_ACCESS_CODE = "INVALID_ACCESS_CODE"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    RATE_LIMITED = "RATE_LIMITED"

    # Resource Errors
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Quote Calculator
    INVALID_PROMO_CODE = "INVALID_PROMO_CODE"
    UNKNOWN_SERVICE = "UNKNOWN_SERVICE"

    # Infrastructure
    INTERNAL_ERROR = "INTERNAL_ERROR"
