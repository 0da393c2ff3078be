"""Authentication service - orchestrates admin access-code login."""

from auth.config import AuthConfig
from auth.database import AdminDatabase
from auth.session import SessionManager
from auth.rate_limiter import RateLimiter
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.types import AuthenticatedAdmin, Session
from auth.exceptions import (
    AdminInactiveError, InvalidAccessCodeError, RateLimitedError, SessionExpiredError,
)


class AdminAuthService:
    """Orchestrates admin authentication.

    Handles:
    - Access-code login (rate limited per client)
    - Session validation
    - Logout
    """

    def __init__(
        self,
        config: AuthConfig,
        admin_db: AdminDatabase,
        session_manager: SessionManager,
        rate_limiter: RateLimiter,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._admin_db = admin_db
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter
        self._security_logger = security_logger

    def login(
        self,
        access_code: str,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthenticatedAdmin:
        """Exchange an access code for a session.

        Flow:
        1. Check per-client rate limit
        2. Look up admin by access code digest
        3. Check admin is active
        4. Create session, update last_login, reset rate limit
        5. Log security events

        Raises:
            RateLimitedError: If too many attempts from this client.
            InvalidAccessCodeError: If the code matches no admin.
            AdminInactiveError: If the admin account is deactivated.
        """
        client = ip_address or "unknown"

        try:
            self._rate_limiter.check_rate_limit(client)
        except RateLimitedError as e:
            self._security_logger.log(
                SecurityEvent.RATE_LIMITED,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"retry_after_seconds": e.retry_after_seconds},
            )
            raise

        admin = self._admin_db.find_by_access_code(access_code)

        if admin is None:
            self._security_logger.log(
                SecurityEvent.LOGIN_FAILED,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "unknown_access_code"},
            )
            raise InvalidAccessCodeError("Invalid access code")

        if not admin.is_active:
            self._security_logger.log(
                SecurityEvent.LOGIN_FAILED,
                admin_id=admin.id,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "admin_inactive"},
            )
            raise AdminInactiveError("Admin account is deactivated")

        session = self._session_manager.create_session(admin.id)
        self._admin_db.update_last_login(admin.id)
        self._rate_limiter.reset_rate_limit(client)

        self._security_logger.log(
            SecurityEvent.LOGIN_SUCCEEDED,
            admin_id=admin.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._security_logger.log(
            SecurityEvent.SESSION_CREATED,
            admin_id=admin.id,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return AuthenticatedAdmin(admin=admin, session=session)

    def logout(self, session_token: str, ip_address: str | None) -> None:
        """Revoke session (logout).

        Safe to call with invalid token.
        """
        # Who is logging out, for the audit trail; an expired token is still revoked
        try:
            admin_id = self._session_manager.validate_session(session_token).admin_id
        except SessionExpiredError:
            admin_id = None

        self._session_manager.revoke_session(session_token)

        self._security_logger.log(
            SecurityEvent.SESSION_REVOKED,
            admin_id=admin_id,
            ip_address=ip_address,
        )

    def validate_session(self, token: str) -> Session:
        """Validate session token.

        Raises:
            SessionExpiredError: If session invalid or expired.
        """
        return self._session_manager.validate_session(token)
