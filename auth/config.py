"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    All durations are in their natural units (minutes for short durations,
    hours for longer ones) to make configuration intuitive.
    """

    # Session settings
    session_expiry_hours: int = Field(
        default=12,
        description="Admin session lifetime in hours",
        ge=1,
        le=720,
    )
    session_extend_on_activity: bool = Field(
        default=True,
        description="Whether to extend session expiry on activity",
    )

    # Rate limiting
    login_attempt_limit: int = Field(
        default=5,
        description="Max login attempts per client IP per window",
        ge=1,
        le=20,
    )
    login_window_minutes: int = Field(
        default=15,
        description="Rate limit window duration",
        ge=1,
        le=60,
    )

    # Cookie
    cookie_name: str = Field(
        default="session_token",
        description="Name of the session cookie",
    )
    secure_cookie: bool = Field(
        default=True,
        description="Send the session cookie over HTTPS only",
    )
