"""Tests for QuoteCalculator - the storefront cost formula."""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.config import PricingConfig
from core.exceptions import InvalidInputError, InvalidPromoCodeError, UnknownServiceError
from core.models import QuoteRequest
from core.services.promo_validator import PromoCodeValidator, PromoRejection
from core.services.quote_calculator import QuoteCalculator, parse_stories, round_half_up
from utils.timezone import now_utc


@pytest.fixture
def calculator(repository):
    return QuoteCalculator(repository, PromoCodeValidator(repository))


def quote(service_key="house-washing", square_footage=1000, **fields) -> QuoteRequest:
    return QuoteRequest(service_key=service_key, square_footage=square_footage, **fields)


# =============================================================================
# HELPERS
# =============================================================================


class TestParseStories:
    """Leading-integer parsing of the stories field."""

    @pytest.mark.parametrize("raw,expected", [
        ("1", 1),
        ("2", 2),
        (" 3", 3),
        ("2 stories", 2),
        ("-1", -1),
        ("abc", None),
        ("", None),
        (None, None),
    ])
    def test_parses_leading_integer(self, raw, expected):
        assert parse_stories(raw) == expected


class TestRoundHalfUp:
    """Half-way values round away from zero, never to even."""

    @pytest.mark.parametrize("value,expected", [
        ("0.5", 1),
        ("1.5", 2),
        ("2.5", 3),
        ("287.5", 288),
        ("12.4", 12),
    ])
    def test_rounds_half_up(self, value, expected):
        assert round_half_up(Decimal(value)) == expected


# =============================================================================
# FORMULA COMPONENTS
# =============================================================================


class TestSizeFactor:
    """One unit per started 1,000 sq ft, never below 1."""

    @pytest.mark.parametrize("square_footage,expected", [
        (100, 1),
        (999, 1),
        (1000, 1),
        (1001, 2),
        (2000, 2),
        (2001, 3),
        (2500, 3),
    ])
    def test_size_factor_boundaries(self, calculator, square_footage, expected):
        assert calculator.size_factor(square_footage) == expected

    def test_custom_step(self, repository):
        """Step size comes from PricingConfig."""
        calculator = QuoteCalculator(
            repository, PromoCodeValidator(repository), PricingConfig(size_step_sqft=500)
        )

        assert calculator.size_factor(1001) == 3


class TestStoryMultiplier:
    """+50% per story above the first; junk means one story."""

    @pytest.mark.parametrize("stories,expected", [
        (None, Decimal(1)),
        ("1", Decimal(1)),
        ("2", Decimal("1.5")),
        ("3", Decimal("2.0")),
        ("abc", Decimal(1)),
        ("0", Decimal(1)),
        ("-2", Decimal(1)),
    ])
    def test_story_multiplier(self, calculator, stories, expected):
        assert calculator.story_multiplier(stories) == expected


class TestExtrasTotal:
    """Each extra adds half its own base price."""

    def test_known_extra_adds_half_base_price(self, calculator):
        assert calculator.extras_total(["deck-cleaning"]) == Decimal("87.5")

    def test_unknown_extra_is_skipped(self, calculator):
        assert calculator.extras_total(["power-wash-xyz"]) == Decimal(0)

    def test_duplicate_extra_counts_once(self, calculator):
        assert calculator.extras_total(["deck-cleaning", "deck-cleaning"]) == Decimal("87.5")

    def test_multiple_extras_sum(self, calculator):
        assert calculator.extras_total(["deck-cleaning", "gutter-cleaning"]) == Decimal("150.0")


# =============================================================================
# CALCULATE
# =============================================================================


class TestCalculate:
    """End-to-end quotes."""

    def test_two_story_house_without_promo(self, calculator):
        """200 base, 2,500 sq ft, 2 stories -> 200 * 3 * 1.5 = 900."""
        result = calculator.calculate(quote(square_footage=2500, stories="2"))

        assert result.base_price == 200
        assert result.size_factor == 3
        assert result.story_multiplier == 1.5
        assert result.extras_total == 0
        assert result.subtotal == 900
        assert result.discount == 0
        assert result.discount_amount == 0
        assert result.total_cost == 900
        assert result.promo_code is None

    def test_promo_discount_applied(self, calculator, repository):
        """10% off 900 -> 810."""
        repository.add_promo("SAVE10", 10)

        result = calculator.calculate(quote(square_footage=2500, stories="2", promo_code="SAVE10"))

        assert result.subtotal == 900
        assert result.discount == 10
        assert result.discount_amount == 90
        assert result.total_cost == 810
        assert result.promo_code == "SAVE10"

    def test_extras_round_half_up_into_subtotal(self, calculator):
        """200 + 87.5 = 287.5 rounds to 288."""
        result = calculator.calculate(quote(extras=["deck-cleaning"]))

        assert result.extras_total == 87.5
        assert result.subtotal == 288
        assert result.total_cost == 288

    def test_discount_amount_rounds_half_up(self, calculator, repository):
        """10% of 125 is 12.5 -> 13."""
        repository.add_promo("SAVE10", 10)

        result = calculator.calculate(quote(service_key="gutter-cleaning", promo_code="SAVE10"))

        assert result.subtotal == 125
        assert result.discount_amount == 13
        assert result.total_cost == 112

    def test_hundred_percent_promo_is_free(self, calculator, repository):
        repository.add_promo("FREE", 100)

        result = calculator.calculate(quote(promo_code="FREE"))

        assert result.discount_amount == result.subtotal
        assert result.total_cost == 0

    def test_blank_promo_is_ignored_and_echoed(self, calculator):
        result = calculator.calculate(quote(promo_code="   "))

        assert result.discount == 0
        assert result.discount_amount == 0
        assert result.promo_code == "   "

    def test_empty_promo_echoes_null(self, calculator):
        result = calculator.calculate(quote(promo_code=""))

        assert result.promo_code is None

    def test_unknown_service_raises(self, calculator):
        with pytest.raises(UnknownServiceError) as exc_info:
            calculator.calculate(quote(service_key="power-wash-xyz"))

        assert exc_info.value.service_key == "power-wash-xyz"

    def test_non_positive_square_footage_raises(self, calculator):
        with pytest.raises(InvalidInputError):
            calculator.calculate(quote(square_footage=0))

    def test_expired_promo_raises(self, calculator, repository):
        repository.add_promo("OLD", 10, expires_at=now_utc() - timedelta(days=1))

        with pytest.raises(InvalidPromoCodeError) as exc_info:
            calculator.calculate(quote(promo_code="OLD"))

        assert exc_info.value.reason == PromoRejection.EXPIRED

    def test_promo_lookup_is_case_sensitive(self, calculator, repository):
        repository.add_promo("SAVE10", 10)

        with pytest.raises(InvalidPromoCodeError) as exc_info:
            calculator.calculate(quote(promo_code="save10"))

        assert exc_info.value.reason == PromoRejection.NOT_FOUND

    def test_window_count_does_not_change_price(self, calculator):
        without = calculator.calculate(quote(square_footage=2500))
        with_windows = calculator.calculate(quote(square_footage=2500, window_count=40))

        assert with_windows == without

    def test_repeated_quotes_are_identical_and_do_not_use_promo(self, calculator, repository):
        """Previewing never redeems: usage_count is untouched."""
        repository.add_promo("LIMITED", 20, usage_limit=1)
        request = quote(square_footage=1800, stories="3", extras=["gutter-cleaning"], promo_code="LIMITED")

        first = calculator.calculate(request)
        second = calculator.calculate(request)

        assert first == second
        assert repository.get_promo_code_by_code("LIMITED").usage_count == 0

    def test_disabled_service_is_still_priced(self, calculator, repository):
        """The enabled flag hides a service from the storefront list only."""
        repository.add_service("roof-cleaning", 250, enabled=False)

        result = calculator.calculate(quote(service_key="roof-cleaning"))

        assert result.total_cost == 250

    def test_wire_output_is_camel_case(self, calculator):
        wire = calculator.calculate(quote(square_footage=2500, stories="2")).to_wire()

        assert wire == {
            "basePrice": 200,
            "sizeFactor": 3,
            "storyMultiplier": 1.5,
            "extrasTotal": 0.0,
            "subtotal": 900,
            "discount": 0,
            "discountAmount": 0,
            "totalCost": 900,
            "promoCode": None,
        }
