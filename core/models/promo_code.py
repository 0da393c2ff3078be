"""Promo code domain models.

A code is redeemable iff it is active, not past its expiry, and under its
usage limit. usage_count only ever goes up, and only through redemption.
"""

from datetime import datetime

from pydantic import Field, field_validator

from core.models.base import WireModel
from utils.timezone import assume_utc


class PromoCodeCreate(WireModel):
    """Data required to create a promo code."""

    code: str = Field(..., min_length=1, max_length=50)
    discount: int = Field(..., gt=0, le=100, description="Percent off the subtotal")
    is_active: bool = True
    usage_limit: int | None = Field(None, ge=1, description="None means unlimited")
    expires_at: datetime | None = None

    @field_validator("code")
    @classmethod
    def reject_blank_code(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Promo code cannot be blank")
        return value

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, value: datetime | None) -> datetime | None:
        return assume_utc(value)


class PromoCodeUpdate(WireModel):
    """
    Partial update. Send null for usage_limit or expires_at to clear them.

    usage_count is deliberately absent; see PromoCodeService.redeem.
    """

    code: str | None = Field(None, min_length=1, max_length=50)
    discount: int | None = Field(None, gt=0, le=100)
    is_active: bool | None = None
    usage_limit: int | None = Field(None, ge=1)
    expires_at: datetime | None = None

    @field_validator("expires_at")
    @classmethod
    def normalize_expiry(cls, value: datetime | None) -> datetime | None:
        return assume_utc(value)


class PromoCode(WireModel):
    """Full promo code as stored."""

    id: int
    code: str
    discount: int
    is_active: bool
    usage_limit: int | None
    usage_count: int
    expires_at: datetime | None
    created_at: datetime

    @field_validator("expires_at", "created_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return assume_utc(value)

    def is_expired(self, now: datetime) -> bool:
        """Strictly past expiry. A code expiring exactly now is still good."""
        return self.expires_at is not None and self.expires_at < now

    def is_exhausted(self) -> bool:
        return self.usage_limit is not None and self.usage_count >= self.usage_limit
