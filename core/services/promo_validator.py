"""
Promo code validation.

Validation is read-only. Previewing a quote any number of times never uses
up a limited code; only PromoCodeService.redeem increments usage.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from core.models import PromoCode
from core.services.pricing_repository import PricingRepository
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class PromoRejection(str, Enum):
    """Why a code was refused. Internal only; visitors see one generic message."""

    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PromoValidation:
    """Outcome of validating one code."""

    valid: bool
    discount: int = 0
    reason: PromoRejection | None = None

    @classmethod
    def accepted(cls, discount: int) -> "PromoValidation":
        return cls(valid=True, discount=discount)

    @classmethod
    def rejected(cls, reason: PromoRejection) -> "PromoValidation":
        return cls(valid=False, reason=reason)


def evaluate_promo(promo: PromoCode | None, now: datetime) -> PromoValidation:
    """
    Apply the validity rules to an already-fetched code.

    Checked in order: existence, active flag, expiry, usage limit.
    """
    if promo is None:
        return PromoValidation.rejected(PromoRejection.NOT_FOUND)
    if not promo.is_active:
        return PromoValidation.rejected(PromoRejection.INACTIVE)
    if promo.is_expired(now):
        return PromoValidation.rejected(PromoRejection.EXPIRED)
    if promo.is_exhausted():
        return PromoValidation.rejected(PromoRejection.EXHAUSTED)
    return PromoValidation.accepted(promo.discount)


class PromoCodeValidator:
    """Looks codes up (case-sensitive, exact) and checks them against the clock."""

    def __init__(self, repository: PricingRepository, clock: Callable[[], datetime] = now_utc):
        self._repository = repository
        self._clock = clock

    def validate(self, code: str) -> PromoValidation:
        promo = self._repository.get_promo_code_by_code(code)
        result = evaluate_promo(promo, self._clock())

        if not result.valid:
            logger.warning("Promo code %r rejected: %s", code, result.reason.value)

        return result
