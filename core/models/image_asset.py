"""Image assets referenced by the storefront (hero, logo, team, gallery...)."""

from datetime import datetime

from pydantic import Field

from core.models.base import WireModel


class ImageAssetCreate(WireModel):
    key: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=2000)
    alt_text: str | None = Field(None, max_length=500)
    category: str = Field(..., min_length=1, max_length=50)
    is_active: bool = True


class ImageAssetUpdate(WireModel):
    key: str | None = Field(None, min_length=1, max_length=100)
    url: str | None = Field(None, min_length=1, max_length=2000)
    alt_text: str | None = Field(None, max_length=500)
    category: str | None = Field(None, min_length=1, max_length=50)
    is_active: bool | None = None


class ImageAsset(WireModel):
    id: int
    key: str
    url: str
    alt_text: str | None
    category: str
    is_active: bool
    updated_at: datetime
