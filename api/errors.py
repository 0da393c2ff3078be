"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from api.base import error_json, ErrorCodes
from core.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidPromoCodeError,
    NotFoundError,
    UnknownServiceError,
)

logger = logging.getLogger(__name__)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(InvalidPromoCodeError)
    async def invalid_promo_handler(request: Request, exc: InvalidPromoCodeError):
        # One message for every reason so codes cannot be probed
        return error_json(400, ErrorCodes.INVALID_PROMO_CODE, "Invalid promo code")

    @app.exception_handler(UnknownServiceError)
    async def unknown_service_handler(request: Request, exc: UnknownServiceError):
        return error_json(400, ErrorCodes.UNKNOWN_SERVICE, "Invalid service selected")

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return error_json(400, ErrorCodes.INVALID_REQUEST, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_json(404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return error_json(409, ErrorCodes.ALREADY_EXISTS, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_json(422, ErrorCodes.VALIDATION_ERROR, _describe_validation_errors(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return error_json(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
