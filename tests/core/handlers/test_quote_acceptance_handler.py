"""Tests for the QuoteAccepted → promo redemption handler."""

import logging
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from core.events import QuoteAccepted
from core.exceptions import InvalidPromoCodeError
from core.handlers.quote_acceptance_handler import handle_quote_accepted
from core.models import QuoteSubmission
from core.services.promo_code_service import PromoCodeService
from core.services.promo_validator import PromoRejection


def _submission(promo_code: str | None) -> QuoteSubmission:
    return QuoteSubmission(
        id=11,
        name="Dana Reyes",
        email="dana@example.com",
        phone="555-123-4567",
        address="12 Elm St",
        service="house-washing",
        message=None,
        promo_code=promo_code,
        status="accepted",
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def promo_service():
    return Mock(spec=PromoCodeService)


class TestQuoteAcceptanceHandler:

    def test_redeems_attached_code(self, promo_service):
        handler = handle_quote_accepted(promo_service)

        handler(QuoteAccepted.create(submission=_submission("SAVE10")))

        promo_service.redeem.assert_called_once_with("SAVE10")

    def test_no_code_no_redemption(self, promo_service):
        handler = handle_quote_accepted(promo_service)

        handler(QuoteAccepted.create(submission=_submission(None)))

        promo_service.redeem.assert_not_called()

    def test_unredeemable_code_logged_not_raised(self, promo_service, caplog):
        promo_service.redeem.side_effect = InvalidPromoCodeError("OLD", PromoRejection.EXPIRED)
        handler = handle_quote_accepted(promo_service)

        with caplog.at_level(logging.WARNING, logger="core.handlers.quote_acceptance_handler"):
            handler(QuoteAccepted.create(submission=_submission("OLD")))

        assert "expired" in caplog.text
        assert "11" in caplog.text
