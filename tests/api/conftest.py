"""API test fixtures: the assembled app over mocked services."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from app import create_app
from auth.exceptions import SessionExpiredError
from auth.service import AdminAuthService
from auth.session import SessionManager
from auth.types import Session
from core.config import NotificationConfig
from core.notification_bus import NotificationBus
from core.services.color_theme_service import ColorThemeService
from core.services.content_service import ContentService
from core.services.image_asset_service import ImageAssetService
from core.services.promo_code_service import PromoCodeService
from core.services.promo_validator import PromoCodeValidator
from core.services.quote_calculator import QuoteCalculator
from core.services.service_pricing_service import ServicePricingService
from core.services.site_setting_service import SiteSettingService
from core.services.submission_service import SubmissionService
from utils.timezone import now_utc


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def services(repository):
    """Mocked persistence services plus a real calculator over the in-memory repository."""
    repository.add_promo("SAVE10", 10)
    return {
        "service_pricing": Mock(spec=ServicePricingService),
        "promo_code": Mock(spec=PromoCodeService),
        "site_setting": Mock(spec=SiteSettingService),
        "image_asset": Mock(spec=ImageAssetService),
        "color_theme": Mock(spec=ColorThemeService),
        "submission": Mock(spec=SubmissionService),
        "content": Mock(spec=ContentService),
        "calculator": QuoteCalculator(repository, PromoCodeValidator(repository)),
    }


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def mock_session_manager(test_admin_id):
    """Accepts only "test-token"."""
    now = now_utc()
    session = Session(
        token="test-token",
        admin_id=test_admin_id,
        created_at=now,
        expires_at=now + timedelta(hours=12),
        last_activity_at=now,
    )

    def validate(token):
        if token != "test-token":
            raise SessionExpiredError("Session not found or expired")
        return session

    mock = Mock(spec=SessionManager)
    mock.validate_session.side_effect = validate
    return mock


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def notification_bus():
    return NotificationBus(NotificationConfig(max_pending_messages=10))


@pytest.fixture
def app(services, mock_session_manager, notification_bus):
    return create_app(
        services,
        Mock(spec=AdminAuthService),
        mock_session_manager,
        notification_bus,
    )


@pytest.fixture
def client(app):
    """Authenticated test client."""
    c = TestClient(app, raise_server_exceptions=False)
    c.cookies.set("session_token", "test-token")
    return c


@pytest.fixture
def unauthed_client(app):
    """Unauthenticated test client (no session cookie)."""
    return TestClient(app, raise_server_exceptions=False)
