"""
Handler for QuoteAccepted events.

On quote acceptance, redeems the promo code the visitor entered with the
request. A code that has since expired or run out is logged and the
acceptance stands: the business already agreed the price with the customer.
"""

import logging
from typing import Callable

from core.events import QuoteAccepted
from core.exceptions import InvalidPromoCodeError

logger = logging.getLogger(__name__)


def handle_quote_accepted(promo_code_service) -> Callable:
    """
    Factory that returns a QuoteAccepted handler.

    Args:
        promo_code_service: PromoCodeService instance

    Returns:
        Handler callable that redeems the submission's promo code
    """

    def handler(event: QuoteAccepted):
        submission = event.submission
        if not submission.promo_code:
            return

        try:
            promo_code_service.redeem(submission.promo_code)
        except InvalidPromoCodeError as e:
            logger.warning(
                f"Quote request {submission.id} accepted without redeeming "
                f"{submission.promo_code!r}: {e.reason.value}"
            )

    return handler
