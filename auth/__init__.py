"""Admin authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    InvalidAccessCodeError,
    RateLimitedError,
    SessionExpiredError,
    AdminInactiveError,
)
from auth.types import (
    AdminAccount,
    Session,
    LoginRequest,
    AuthenticatedAdmin,
)
from auth.config import AuthConfig
from auth.database import AdminDatabase, hash_access_code
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.service import AdminAuthService
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
