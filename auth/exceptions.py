"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class InvalidAccessCodeError(AuthError):
    """
    Access code does not match any admin account.

    Responses never say whether an account exists.
    """


class RateLimitedError(AuthError):
    """Too many attempts. Client should wait before retrying."""

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limited. Retry after {retry_after_seconds} seconds.")


class SessionExpiredError(AuthError):
    """Session has expired or was revoked; the admin must log in again."""


class AdminInactiveError(AuthError):
    """Admin account is deactivated. Login not permitted."""
