"""Service pricing domain models.

Prices are whole currency units (dollars), as shown on the storefront.
The service key is the stable identity used by quotes and extras.
"""

from datetime import datetime

from pydantic import Field

from core.models.base import WireModel

SERVICE_KEY_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ServicePricingCreate(WireModel):
    """Data required to create a priced service."""

    service_key: str = Field(..., min_length=1, max_length=100, pattern=SERVICE_KEY_PATTERN)
    name: str = Field(..., min_length=1, max_length=255)
    base_price: int = Field(..., ge=0)
    enabled: bool = True
    requires_stories: bool = False
    description: str | None = Field(None, max_length=1000)


class ServicePricingUpdate(WireModel):
    """Fields an admin may change. The service key is immutable."""

    name: str | None = Field(None, min_length=1, max_length=255)
    base_price: int | None = Field(None, ge=0)
    enabled: bool | None = None
    requires_stories: bool | None = None
    description: str | None = Field(None, max_length=1000)


class ServicePricing(WireModel):
    """Full pricing row as stored."""

    id: int
    service_key: str
    name: str
    base_price: int
    enabled: bool
    requires_stories: bool
    description: str | None
    updated_at: datetime
    deleted_at: datetime | None = None
