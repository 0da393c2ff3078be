"""Pricing and live-update configuration."""

from pydantic import BaseModel, Field

# Enforced at the HTTP boundary; the calculator only rejects non-positive sizes.
MIN_SQUARE_FOOTAGE = 100


class PricingConfig(BaseModel):
    """
    Quote formula constants.

    Defaults reproduce the published calculator. Changing them changes every
    quote, so they are config rather than admin-editable settings.
    """

    size_step_sqft: int = Field(
        default=1000,
        description="Square feet per size-factor unit (rounded up)",
        ge=1,
    )
    story_surcharge: float = Field(
        default=0.5,
        description="Multiplier added per story above the first",
        ge=0,
    )
    extras_rate: float = Field(
        default=0.5,
        description="Fraction of an add-on service's base price charged as an extra",
        ge=0,
        le=1,
    )


class NotificationConfig(BaseModel):
    """Live-update fan-out settings."""

    max_pending_messages: int = Field(
        default=100,
        description="Per-subscriber queue depth; events beyond this are dropped",
        ge=1,
        le=10000,
    )
    send_timeout_seconds: float = Field(
        default=10.0,
        description="A websocket send slower than this counts as a disconnect",
        gt=0,
    )
