"""Security middleware for FastAPI - session validation and admin context."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from auth.session import SessionManager
from auth.exceptions import SessionExpiredError
from api.base import error_json, ErrorCodes
from utils.admin_context import set_current_admin_id, clear_current_admin_id


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that validates the admin session and sets admin context.

    For protected routes:
    1. Extracts session token from the session cookie
    2. Validates session via SessionManager
    3. Sets admin_id in request.state and admin context (for audit attribution)
    4. Clears context after request completes

    Everything outside PROTECTED_PATHS is public storefront traffic.
    """

    PROTECTED_PATHS = [
        "/api/admin/",
        "/auth/me",
    ]

    def __init__(self, app, session_manager: SessionManager, cookie_name: str = "session_token"):
        super().__init__(app)
        self._session_manager = session_manager
        self._cookie_name = cookie_name

    def _is_protected_path(self, path: str) -> bool:
        """Check if path is in protected paths list."""
        for protected_path in self.PROTECTED_PATHS:
            if path == protected_path.rstrip("/") or path.startswith(protected_path):
                return True
        return False

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if not self._is_protected_path(request.url.path):
            return await call_next(request)

        session_token = request.cookies.get(self._cookie_name)

        if not session_token:
            return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        try:
            session = self._session_manager.validate_session(session_token)
        except SessionExpiredError:
            return error_json(401, ErrorCodes.SESSION_EXPIRED, "Session has expired")

        set_current_admin_id(session.admin_id)
        request.state.admin_id = session.admin_id
        request.state.session = session

        try:
            response = await call_next(request)
            return response
        finally:
            # Always clear context
            clear_current_admin_id()
