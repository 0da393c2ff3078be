"""
Application assembly.

build_services() wires the domain services over one PostgresClient and one
EventBus; create_app() mounts them behind the HTTP and websocket routers.
create_production_app() pulls connection secrets from Vault and is the
uvicorn entry point:

    uvicorn app:create_production_app --factory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.admin import create_admin_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from api.storefront import create_storefront_router
from api.ws import create_ws_router
from auth import (
    AdminAuthService, AdminDatabase, AuthConfig, AuthMiddleware,
    RateLimiter, SecurityLogger, SessionManager, create_auth_router,
)
from clients import (
    PostgresClient, ValkeyClient,
    get_bootstrap_access_code, get_database_url, get_valkey_url,
)
from core.audit import AuditLogger
from core.config import NotificationConfig, PricingConfig
from core.event_bus import EventBus
from core.handlers.change_broadcast_handler import handle_change_event
from core.handlers.quote_acceptance_handler import handle_quote_accepted
from core.notification_bus import NotificationBus
from core.seed import seed_defaults
from core.services.color_theme_service import ColorThemeService
from core.services.content_service import ContentService
from core.services.image_asset_service import ImageAssetService
from core.services.pricing_repository import StorePricingRepository
from core.services.promo_code_service import PromoCodeService
from core.services.promo_validator import PromoCodeValidator
from core.services.quote_calculator import QuoteCalculator
from core.services.service_pricing_service import ServicePricingService
from core.services.site_setting_service import SiteSettingService
from core.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)


def build_services(
    postgres: PostgresClient,
    event_bus: EventBus,
    pricing_config: PricingConfig | None = None,
) -> dict:
    """Construct every domain service. Keys match what the routers expect."""
    audit = AuditLogger(postgres)

    pricing = ServicePricingService(postgres, audit, event_bus)
    promo_codes = PromoCodeService(postgres, audit, event_bus)
    repository = StorePricingRepository(pricing, promo_codes)

    return {
        "service_pricing": pricing,
        "promo_code": promo_codes,
        "site_setting": SiteSettingService(postgres, audit, event_bus),
        "image_asset": ImageAssetService(postgres, audit, event_bus),
        "color_theme": ColorThemeService(postgres, audit, event_bus),
        "submission": SubmissionService(postgres, audit, event_bus),
        "content": ContentService(postgres),
        "calculator": QuoteCalculator(
            repository, PromoCodeValidator(repository), pricing_config
        ),
    }


def wire_event_handlers(event_bus: EventBus, services: dict, notification_bus: NotificationBus) -> None:
    """Subscribe the domain event handlers."""
    event_bus.subscribe("ChangeEvent", handle_change_event(notification_bus))
    event_bus.subscribe("QuoteAccepted", handle_quote_accepted(services["promo_code"]))


def create_app(
    services: dict,
    auth_service: AdminAuthService,
    session_manager: SessionManager,
    notification_bus: NotificationBus,
    auth_config: AuthConfig | None = None,
    notification_config: NotificationConfig | None = None,
    on_shutdown=None,
) -> FastAPI:
    """Assemble the FastAPI app around already-built services."""
    auth_config = auth_config or AuthConfig()
    notification_config = notification_config or NotificationConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        notification_bus.close_all()
        if on_shutdown is not None:
            on_shutdown()

    app = FastAPI(title="Eco Clean Storefront", lifespan=lifespan)

    register_error_handlers(app)
    # Added last runs first: request ids wrap auth failures too
    app.add_middleware(AuthMiddleware, session_manager=session_manager, cookie_name=auth_config.cookie_name)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(create_storefront_router(services), prefix="/api", tags=["storefront"])
    app.include_router(create_admin_router(services), prefix="/api/admin", tags=["admin"])
    app.include_router(create_auth_router(auth_service, auth_config), prefix="/auth")
    app.include_router(create_ws_router(notification_bus, notification_config))

    @app.get("/health")
    async def health():
        return {"status": "ok", "liveClients": notification_bus.subscriber_count}

    return app


def _ensure_bootstrap_admin(admin_db: AdminDatabase) -> None:
    if admin_db.count_admins() > 0:
        return
    admin_db.create_admin("Owner", get_bootstrap_access_code())
    logger.info("Created bootstrap admin account")


def create_production_app() -> FastAPI:
    """Build the app against Vault-configured Postgres and Valkey."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())

    auth_config = AuthConfig()
    notification_config = NotificationConfig()

    event_bus = EventBus()
    notification_bus = NotificationBus(notification_config)
    services = build_services(postgres, event_bus, PricingConfig())
    wire_event_handlers(event_bus, services, notification_bus)

    seed_defaults(postgres, services)

    admin_db = AdminDatabase(postgres)
    _ensure_bootstrap_admin(admin_db)

    session_manager = SessionManager(valkey, auth_config)
    auth_service = AdminAuthService(
        config=auth_config,
        admin_db=admin_db,
        session_manager=session_manager,
        rate_limiter=RateLimiter(valkey, auth_config),
        security_logger=SecurityLogger(postgres),
    )

    def shutdown():
        valkey.close()
        PostgresClient.close_all_pools()

    return create_app(
        services,
        auth_service,
        session_manager,
        notification_bus,
        auth_config=auth_config,
        notification_config=notification_config,
        on_shutdown=shutdown,
    )
