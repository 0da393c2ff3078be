"""HTTP routes for admin authentication."""

import ipaddress

from fastapi import APIRouter, Request, Response

from api.base import error_json, ErrorCodes
from auth.config import AuthConfig
from auth.exceptions import AdminInactiveError, InvalidAccessCodeError, RateLimitedError
from auth.service import AdminAuthService
from auth.types import LoginRequest


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def create_auth_router(auth_service: AdminAuthService, config: AuthConfig) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/login")
    async def login(request: Request, response: Response, body: LoginRequest):
        """Exchange an access code for a session cookie."""
        try:
            result = auth_service.login(
                access_code=body.access_code,
                ip_address=_get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except RateLimitedError as e:
            return error_json(
                429,
                ErrorCodes.RATE_LIMITED,
                f"Too many attempts. Please wait {e.retry_after_seconds} seconds.",
                headers={"Retry-After": str(e.retry_after_seconds)},
            )
        except InvalidAccessCodeError:
            return error_json(401, ErrorCodes.INVALID_ACCESS_CODE, "Invalid access code")
        except AdminInactiveError:
            return error_json(403, ErrorCodes.ACCOUNT_INACTIVE, "Account is deactivated")

        response.set_cookie(
            key=config.cookie_name,
            value=result.session.token,
            httponly=True,
            secure=config.secure_cookie,
            samesite="lax",
            max_age=int((result.session.expires_at - result.session.created_at).total_seconds()),
        )

        return {
            "admin": {
                "id": str(result.admin.id),
                "name": result.admin.name,
            }
        }

    @router.post("/logout")
    async def logout(request: Request, response: Response):
        """Logout - revoke session and clear cookie."""
        session_token = request.cookies.get(config.cookie_name)

        if session_token:
            auth_service.logout(
                session_token=session_token,
                ip_address=_get_client_ip(request),
            )

        response.delete_cookie(key=config.cookie_name)

        return {"message": "Logged out successfully"}

    @router.get("/me")
    async def get_current_admin(request: Request):
        """Get current authenticated admin.

        Requires authentication (middleware sets admin context).
        """
        if not hasattr(request.state, "admin_id"):
            return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

        session = request.state.session
        return {
            "adminId": str(request.state.admin_id),
            "expiresAt": session.expires_at.isoformat(),
        }

    return router
