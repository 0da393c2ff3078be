"""Brand color tokens applied by the storefront at runtime."""

from datetime import datetime

from pydantic import Field

from core.models.base import WireModel


class ColorThemeCreate(WireModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=50, description="Any CSS color")
    category: str = Field(..., min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)


class ColorThemeUpdate(WireModel):
    key: str | None = Field(None, min_length=1, max_length=100)
    value: str | None = Field(None, min_length=1, max_length=50)
    category: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)


class ColorTheme(WireModel):
    id: int
    key: str
    value: str
    category: str
    description: str | None
    updated_at: datetime
