"""
Read interface the quote calculator prices against.

The calculator needs exactly two lookups. Anything that answers them can back
a quote: the Postgres-backed admin services in production, a dict in tests.
"""

from typing import Protocol

from core.models import PromoCode, ServicePricing


class PricingRepository(Protocol):
    """Current pricing and promo state."""

    def get_service_pricing_by_key(self, key: str) -> ServicePricing | None:
        ...

    def get_promo_code_by_code(self, code: str) -> PromoCode | None:
        ...


class StorePricingRepository:
    """PricingRepository over the admin services' own reads."""

    def __init__(self, pricing_service, promo_code_service):
        self._pricing = pricing_service
        self._promo_codes = promo_code_service

    def get_service_pricing_by_key(self, key: str) -> ServicePricing | None:
        return self._pricing.get_by_key(key)

    def get_promo_code_by_code(self, code: str) -> PromoCode | None:
        return self._promo_codes.get_by_code(code)
