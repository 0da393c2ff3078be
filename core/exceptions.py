"""Typed exceptions for pricing and admin mutation failures.

Callers get a distinct type per failure kind. The HTTP layer decides how much
of that distinction reaches the storefront.
"""


class PricingError(Exception):
    """Base class for quote, promo, and admin resource errors."""


class InvalidInputError(PricingError):
    """Request fields are malformed or out of range."""


class UnknownServiceError(PricingError):
    """Referenced service key has no pricing row."""

    def __init__(self, service_key: str):
        self.service_key = service_key
        super().__init__(f"No pricing for service '{service_key}'")


class InvalidPromoCodeError(PricingError):
    """
    Promo code cannot be applied.

    `reason` keeps the internal distinction (not found, inactive, expired,
    exhausted) for logs and tests. Never show it to storefront visitors:
    it reveals which codes exist.
    """

    def __init__(self, code: str, reason):
        self.code = code
        self.reason = reason
        super().__init__(f"Promo code rejected ({reason.value})")


class NotFoundError(PricingError):
    """Admin update/delete addressed a resource that does not exist."""

    def __init__(self, resource: str, identifier):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} {identifier} not found")


class ConflictError(PricingError):
    """Create would duplicate a unique key."""
