"""API modules for HTTP interface."""

from api.base import (
    ErrorBody,
    error_response,
    error_json,
    ErrorCodes,
)
