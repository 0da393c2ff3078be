"""Public storefront routes: cost calculator, content reads, form submissions."""

from fastapi import APIRouter, Request
from pydantic import Field

from api.base import ErrorCodes, error_json
from core.config import MIN_SQUARE_FOOTAGE
from core.models import ContactMessageCreate, QuoteRequest, QuoteSubmissionCreate


class CalculateCostRequest(QuoteRequest):
    """Calculator form body. The storefront does not quote below its minimum size."""

    square_footage: int = Field(..., ge=MIN_SQUARE_FOOTAGE)


def _wire(models) -> list[dict]:
    return [m.to_wire() for m in models]


def create_storefront_router(services: dict) -> APIRouter:
    router = APIRouter()

    calculator = services["calculator"]
    pricing_svc = services["service_pricing"]
    setting_svc = services["site_setting"]
    image_svc = services["image_asset"]
    theme_svc = services["color_theme"]
    content_svc = services["content"]
    submission_svc = services["submission"]

    # -------------------------------------------------------------------------
    # Cost calculator
    # -------------------------------------------------------------------------

    @router.post("/calculate-cost")
    async def calculate_cost(request: Request, body: CalculateCostRequest):
        return calculator.calculate(body).to_wire()

    # -------------------------------------------------------------------------
    # Admin-managed content, read side
    # -------------------------------------------------------------------------

    @router.get("/service-pricing")
    async def list_service_pricing(request: Request):
        return _wire(pricing_svc.list_enabled())

    @router.get("/site-settings")
    async def list_site_settings(request: Request):
        return _wire(setting_svc.list_all())

    @router.get("/image-assets")
    async def list_image_assets(request: Request):
        return _wire(image_svc.list_all(active_only=True))

    @router.get("/image-assets/{category}")
    async def list_image_assets_by_category(request: Request, category: str):
        return _wire(image_svc.list_by_category(category, active_only=True))

    @router.get("/color-themes")
    async def list_color_themes(request: Request):
        return _wire(theme_svc.list_all())

    # -------------------------------------------------------------------------
    # Marketing content
    # -------------------------------------------------------------------------

    @router.get("/faqs")
    async def list_faqs(request: Request):
        return _wire(content_svc.list_faqs())

    @router.get("/service-areas")
    async def list_service_areas(request: Request):
        return _wire(content_svc.list_service_areas())

    # Registered before /blog-posts/{slug} so "featured" is not read as a slug
    @router.get("/blog-posts/featured")
    async def list_featured_blog_posts(request: Request):
        return _wire(content_svc.list_featured_blog_posts())

    @router.get("/blog-posts")
    async def list_blog_posts(request: Request):
        return _wire(content_svc.list_blog_posts())

    @router.get("/blog-posts/{slug}")
    async def get_blog_post(request: Request, slug: str):
        post = content_svc.get_blog_post(slug)
        if post is None:
            return error_json(404, ErrorCodes.NOT_FOUND, "Blog post not found")
        return post.to_wire()

    @router.get("/gallery/featured")
    async def list_featured_gallery(request: Request):
        return _wire(content_svc.list_featured_gallery())

    @router.get("/gallery")
    async def list_gallery(request: Request):
        return _wire(content_svc.list_gallery())

    # -------------------------------------------------------------------------
    # Form submissions
    # -------------------------------------------------------------------------

    @router.post("/quotes")
    async def submit_quote_request(request: Request, body: QuoteSubmissionCreate):
        return submission_svc.create_quote(body).to_wire()

    @router.post("/contacts")
    async def submit_contact_message(request: Request, body: ContactMessageCreate):
        return submission_svc.create_contact(body).to_wire()

    return router
