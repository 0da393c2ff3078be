"""Admin back-office routes under /api/admin. AuthMiddleware guards the prefix."""

from fastapi import APIRouter, Request
from pydantic import Field

from core.models import (
    ColorThemeCreate, ColorThemeUpdate,
    ImageAssetCreate, ImageAssetUpdate,
    PromoCodeCreate, PromoCodeUpdate,
    QuoteStatus, QuoteStatusUpdate,
    ServicePricingCreate, ServicePricingUpdate,
    SiteSettingCreate, SiteSettingUpdate,
    WireModel,
)


class RedeemRequest(WireModel):
    code: str = Field(..., min_length=1, max_length=50)


DELETED = {"success": True}


def _wire(models) -> list[dict]:
    return [m.to_wire() for m in models]


def create_admin_router(services: dict) -> APIRouter:
    router = APIRouter()

    pricing_svc = services["service_pricing"]
    promo_svc = services["promo_code"]
    setting_svc = services["site_setting"]
    image_svc = services["image_asset"]
    theme_svc = services["color_theme"]
    submission_svc = services["submission"]

    # -------------------------------------------------------------------------
    # Site settings (by key; update creates missing keys)
    # -------------------------------------------------------------------------

    @router.get("/site-settings")
    async def list_site_settings(request: Request):
        return _wire(setting_svc.list_all())

    @router.post("/site-settings")
    async def create_site_setting(request: Request, body: SiteSettingCreate):
        return setting_svc.create(body).to_wire()

    @router.put("/site-settings/{key}")
    async def update_site_setting(request: Request, key: str, body: SiteSettingUpdate):
        return setting_svc.update(key, body).to_wire()

    @router.delete("/site-settings/{key}")
    async def delete_site_setting(request: Request, key: str):
        setting_svc.delete(key)
        return DELETED

    # -------------------------------------------------------------------------
    # Service pricing (by service key; update creates missing keys)
    # -------------------------------------------------------------------------

    @router.get("/service-pricing")
    async def list_service_pricing(request: Request):
        return _wire(pricing_svc.list_all())

    @router.post("/service-pricing")
    async def create_service_pricing(request: Request, body: ServicePricingCreate):
        return pricing_svc.create(body).to_wire()

    @router.put("/service-pricing/{service_key}")
    async def update_service_pricing(request: Request, service_key: str, body: ServicePricingUpdate):
        return pricing_svc.update(service_key, body).to_wire()

    @router.delete("/service-pricing/{service_key}")
    async def delete_service_pricing(request: Request, service_key: str):
        pricing_svc.delete(service_key)
        return DELETED

    # -------------------------------------------------------------------------
    # Promo codes (by id)
    # -------------------------------------------------------------------------

    @router.get("/promo-codes")
    async def list_promo_codes(request: Request):
        return _wire(promo_svc.list_all())

    @router.post("/promo-codes")
    async def create_promo_code(request: Request, body: PromoCodeCreate):
        return promo_svc.create(body).to_wire()

    # Registered before /promo-codes/{promo_id}
    @router.post("/promo-codes/redeem")
    async def redeem_promo_code(request: Request, body: RedeemRequest):
        return promo_svc.redeem(body.code).to_wire()

    @router.put("/promo-codes/{promo_id}")
    async def update_promo_code(request: Request, promo_id: int, body: PromoCodeUpdate):
        return promo_svc.update(promo_id, body).to_wire()

    @router.delete("/promo-codes/{promo_id}")
    async def delete_promo_code(request: Request, promo_id: int):
        promo_svc.delete(promo_id)
        return DELETED

    # -------------------------------------------------------------------------
    # Image assets (by id)
    # -------------------------------------------------------------------------

    @router.get("/image-assets")
    async def list_image_assets(request: Request):
        return _wire(image_svc.list_all())

    @router.get("/image-assets/{category}")
    async def list_image_assets_by_category(request: Request, category: str):
        return _wire(image_svc.list_by_category(category))

    @router.post("/image-assets")
    async def create_image_asset(request: Request, body: ImageAssetCreate):
        return image_svc.create(body).to_wire()

    @router.put("/image-assets/{asset_id}")
    async def update_image_asset(request: Request, asset_id: int, body: ImageAssetUpdate):
        return image_svc.update(asset_id, body).to_wire()

    @router.delete("/image-assets/{asset_id}")
    async def delete_image_asset(request: Request, asset_id: int):
        image_svc.delete(asset_id)
        return DELETED

    # -------------------------------------------------------------------------
    # Color themes (by id)
    # -------------------------------------------------------------------------

    @router.get("/color-themes")
    async def list_color_themes(request: Request):
        return _wire(theme_svc.list_all())

    @router.post("/color-themes")
    async def create_color_theme(request: Request, body: ColorThemeCreate):
        return theme_svc.create(body).to_wire()

    @router.put("/color-themes/{theme_id}")
    async def update_color_theme(request: Request, theme_id: int, body: ColorThemeUpdate):
        return theme_svc.update(theme_id, body).to_wire()

    @router.delete("/color-themes/{theme_id}")
    async def delete_color_theme(request: Request, theme_id: int):
        theme_svc.delete(theme_id)
        return DELETED

    # -------------------------------------------------------------------------
    # Submissions
    # -------------------------------------------------------------------------

    @router.get("/quotes")
    async def list_quote_requests(request: Request, status: QuoteStatus | None = None):
        return _wire(submission_svc.list_quotes(status))

    @router.put("/quotes/{submission_id}/status")
    async def update_quote_status(request: Request, submission_id: int, body: QuoteStatusUpdate):
        return submission_svc.update_status(submission_id, body.status).to_wire()

    @router.get("/contacts")
    async def list_contact_messages(request: Request):
        return _wire(submission_svc.list_contacts())

    return router
