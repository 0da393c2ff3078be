"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminAccount(BaseModel):
    """A person allowed into the storefront back office."""

    id: UUID
    name: str
    is_active: bool = True
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}


class Session(BaseModel):
    """An active admin session."""

    token: str = Field(..., description="Session token (opaque string)")
    admin_id: UUID
    created_at: datetime
    expires_at: datetime
    last_activity_at: datetime


class LoginRequest(BaseModel):
    """Request payload for access-code login."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_code: str = Field(..., min_length=1, max_length=200)


class AuthenticatedAdmin(BaseModel):
    """Admin info returned after successful authentication."""

    admin: AdminAccount
    session: Session
