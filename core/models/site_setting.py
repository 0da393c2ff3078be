"""Editable site text and flags, addressed by key."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from core.models.base import WireModel


class SettingType(str, Enum):
    """How the storefront should interpret a setting's value string."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"


class SiteSettingCreate(WireModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str
    type: SettingType = SettingType.TEXT
    category: str = Field("general", min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)


class SiteSettingUpdate(WireModel):
    """Update by key. Missing keys are created, so value is required."""

    value: str
    type: SettingType | None = None
    category: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)


class SiteSetting(WireModel):
    id: int
    key: str
    value: str
    type: SettingType
    category: str
    description: str | None
    updated_at: datetime
