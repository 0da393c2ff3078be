"""
Cost calculator for the storefront quote widget.

    subtotal = round(base * size_factor * story_multiplier + extras_total)
    total    = subtotal - round(subtotal * discount% / 100)

Arithmetic runs in Decimal and rounds half-up, so a given request always
prices to the same cents the storefront has always shown.
"""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP

from core.config import PricingConfig
from core.exceptions import InvalidInputError, InvalidPromoCodeError, UnknownServiceError
from core.models import QuoteRequest, QuoteResult
from core.services.pricing_repository import PricingRepository
from core.services.promo_validator import PromoCodeValidator

logger = logging.getLogger(__name__)

# Leading integer, the way the storefront form has always read "2", " 3", "2 stories"
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_stories(stories: str | None) -> int | None:
    """Leading integer of the stories field, or None if it has none."""
    if stories is None:
        return None
    match = _LEADING_INT.match(stories)
    if match is None:
        return None
    return int(match.group(1))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class QuoteCalculator:
    """Prices a QuoteRequest against the current pricing repository."""

    def __init__(
        self,
        repository: PricingRepository,
        validator: PromoCodeValidator,
        config: PricingConfig | None = None,
    ):
        self._repository = repository
        self._validator = validator
        self._config = config or PricingConfig()

    def size_factor(self, square_footage: int) -> int:
        """One unit per started size step, never below 1. 2,500 sq ft -> 3."""
        step = self._config.size_step_sqft
        return max(1, -(-square_footage // step))

    def story_multiplier(self, stories: str | None) -> Decimal:
        """1 for one story or unparseable input, +surcharge per extra story."""
        count = parse_stories(stories)
        if count is None or count <= 1:
            return Decimal(1)
        return 1 + (count - 1) * Decimal(str(self._config.story_surcharge))

    def extras_total(self, extras: list[str]) -> Decimal:
        """
        Sum of add-on charges. Each distinct key counts once.

        Keys without a pricing row are skipped: the widget may offer add-ons
        the admin has since removed.
        """
        rate = Decimal(str(self._config.extras_rate))
        total = Decimal(0)
        for key in dict.fromkeys(extras):
            pricing = self._repository.get_service_pricing_by_key(key)
            if pricing is None:
                logger.debug("Ignoring unknown extra %r", key)
                continue
            total += pricing.base_price * rate
        return total

    def calculate(self, request: QuoteRequest) -> QuoteResult:
        """
        Itemized quote.

        Raises:
            InvalidInputError: square footage is zero or negative
            UnknownServiceError: no pricing row for request.service_key
            InvalidPromoCodeError: a promo code was given and is not valid
        """
        if request.square_footage <= 0:
            raise InvalidInputError("Square footage must be positive")

        pricing = self._repository.get_service_pricing_by_key(request.service_key)
        if pricing is None:
            raise UnknownServiceError(request.service_key)

        size_factor = self.size_factor(request.square_footage)
        story_multiplier = self.story_multiplier(request.stories)
        extras_total = self.extras_total(request.extras)

        subtotal = round_half_up(
            pricing.base_price * size_factor * story_multiplier + extras_total
        )

        discount = 0
        discount_amount = 0
        # Echoed as sent; an empty string echoes as null
        promo_code = request.promo_code or None
        if promo_code is not None and promo_code.strip():
            validation = self._validator.validate(promo_code)
            if not validation.valid:
                raise InvalidPromoCodeError(promo_code, validation.reason)
            discount = validation.discount
            discount_amount = round_half_up(Decimal(subtotal) * discount / 100)

        return QuoteResult(
            base_price=pricing.base_price,
            size_factor=size_factor,
            story_multiplier=float(story_multiplier),
            extras_total=float(extras_total),
            subtotal=subtotal,
            discount=discount,
            discount_amount=discount_amount,
            total_cost=subtotal - discount_amount,
            promo_code=promo_code,
        )
