"""Shared test fixtures for the storefront test suite."""

import json
from datetime import timedelta
from pathlib import Path
from unittest.mock import Mock
from uuid import UUID

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

# Reset vault client singleton to pick up env vars
import clients.vault_client as vault_module
vault_module.reset_vault_cache()

from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from core.event_bus import EventBus
from core.models import PromoCode, ServicePricing
from utils.admin_context import admin_context, clear_current_admin_id
from utils.timezone import now_utc


# =============================================================================
# TEST ADMIN CONSTANTS
# =============================================================================

TEST_ADMIN_ID = UUID("00000000-0000-0000-0000-000000000001")
TEST_ADMIN_B_ID = UUID("00000000-0000-0000-0000-000000000002")


# =============================================================================
# ADMIN CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_admin_context():
    """Ensure clean admin context before and after each test."""
    clear_current_admin_id()
    yield
    clear_current_admin_id()


@pytest.fixture
def test_admin_id() -> UUID:
    return TEST_ADMIN_ID


@pytest.fixture
def test_admin_b_id() -> UUID:
    return TEST_ADMIN_B_ID


@pytest.fixture
def as_test_admin(test_admin_id):
    """Run the test inside the primary admin's context."""
    with admin_context(test_admin_id):
        yield test_admin_id


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def db():
    """PostgresClient stand-in; tests script the rows each query returns."""
    return Mock(spec=PostgresClient)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def published(event_bus):
    """Every event published on event_bus, in order."""
    events = []
    event_bus.subscribe("ChangeEvent", events.append)
    event_bus.subscribe("QuoteAccepted", events.append)
    return events


# =============================================================================
# VALKEY FIXTURES
# =============================================================================


class FakeValkey:
    """In-memory ValkeyClient double. TTLs are recorded, never elapse."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def ping(self) -> bool:
        return True

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, expire_seconds=None):
        self.data[key] = value
        if expire_seconds:
            self.ttls[key] = expire_seconds
        else:
            self.ttls.pop(key, None)

    def delete(self, key) -> bool:
        self.ttls.pop(key, None)
        return self.data.pop(key, None) is not None

    def incr(self, key) -> int:
        value = int(self.data.get(key, "0")) + 1
        self.data[key] = str(value)
        return value

    def expire(self, key, seconds) -> bool:
        if key not in self.data:
            return False
        self.ttls[key] = seconds
        return True

    def ttl(self, key) -> int:
        if key not in self.data:
            return -2
        return self.ttls.get(key, -1)

    def set_json(self, key, value, expire_seconds=None):
        self.set(key, json.dumps(value), expire_seconds)

    def get_json(self, key):
        value = self.get(key)
        return json.loads(value) if value is not None else None

    def close(self):
        pass


@pytest.fixture
def valkey():
    fake = FakeValkey()
    # Fail loudly if ValkeyClient grows methods the fake lacks
    missing = [
        name for name in dir(ValkeyClient)
        if not name.startswith("_") and not hasattr(fake, name)
    ]
    assert not missing, f"FakeValkey missing {missing}"
    return fake


# =============================================================================
# PRICING FIXTURES
# =============================================================================


class InMemoryPricingRepository:
    """Dict-backed PricingRepository."""

    def __init__(self):
        self.pricing: dict[str, ServicePricing] = {}
        self.promo_codes: dict[str, PromoCode] = {}

    def add_service(self, service_key, base_price, **fields) -> ServicePricing:
        pricing = make_pricing(service_key=service_key, base_price=base_price, **fields)
        self.pricing[service_key] = pricing
        return pricing

    def add_promo(self, code, discount, **fields) -> PromoCode:
        promo = make_promo(code=code, discount=discount, **fields)
        self.promo_codes[code] = promo
        return promo

    def get_service_pricing_by_key(self, key):
        return self.pricing.get(key)

    def get_promo_code_by_code(self, code):
        return self.promo_codes.get(code)


def make_pricing(**fields) -> ServicePricing:
    values = {
        "id": 1,
        "service_key": "house-washing",
        "name": "House Washing",
        "base_price": 200,
        "enabled": True,
        "requires_stories": True,
        "description": None,
        "updated_at": now_utc(),
        "deleted_at": None,
    }
    values.update(fields)
    return ServicePricing(**values)


def make_promo(**fields) -> PromoCode:
    values = {
        "id": 1,
        "code": "SAVE10",
        "discount": 10,
        "is_active": True,
        "usage_limit": None,
        "usage_count": 0,
        "expires_at": now_utc() + timedelta(days=30),
        "created_at": now_utc() - timedelta(days=1),
    }
    values.update(fields)
    return PromoCode(**values)


@pytest.fixture
def repository():
    """Repository preloaded with the default house-washing and deck prices."""
    repo = InMemoryPricingRepository()
    repo.add_service("house-washing", 200, id=1)
    repo.add_service("deck-cleaning", 175, id=2, name="Deck Cleaning", requires_stories=False)
    repo.add_service("gutter-cleaning", 125, id=3, name="Gutter Cleaning")
    return repo


@pytest.fixture
def pricing_factory():
    """Build a ServicePricing with overridable fields."""
    return make_pricing


@pytest.fixture
def promo_factory():
    """Build a PromoCode with overridable fields."""
    return make_promo
