"""Core domain models."""

from core.models.base import WireModel
from core.models.service_pricing import ServicePricing, ServicePricingCreate, ServicePricingUpdate
from core.models.promo_code import PromoCode, PromoCodeCreate, PromoCodeUpdate
from core.models.site_setting import SiteSetting, SiteSettingCreate, SiteSettingUpdate, SettingType
from core.models.image_asset import ImageAsset, ImageAssetCreate, ImageAssetUpdate
from core.models.color_theme import ColorTheme, ColorThemeCreate, ColorThemeUpdate
from core.models.quote import QuoteRequest, QuoteResult
from core.models.submission import (
    QuoteSubmission, QuoteSubmissionCreate, QuoteStatus, QuoteStatusUpdate,
    ContactMessage, ContactMessageCreate,
)
from core.models.content import FAQ, ServiceArea, BlogPost, GalleryImage

__all__ = [
    "WireModel",
    # Pricing
    "ServicePricing", "ServicePricingCreate", "ServicePricingUpdate",
    # Promo
    "PromoCode", "PromoCodeCreate", "PromoCodeUpdate",
    # Site content
    "SiteSetting", "SiteSettingCreate", "SiteSettingUpdate", "SettingType",
    "ImageAsset", "ImageAssetCreate", "ImageAssetUpdate",
    "ColorTheme", "ColorThemeCreate", "ColorThemeUpdate",
    # Calculator
    "QuoteRequest", "QuoteResult",
    # Submissions
    "QuoteSubmission", "QuoteSubmissionCreate", "QuoteStatus", "QuoteStatusUpdate",
    "ContactMessage", "ContactMessageCreate",
    # Content
    "FAQ", "ServiceArea", "BlogPost", "GalleryImage",
]
