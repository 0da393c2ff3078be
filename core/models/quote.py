"""Cost calculator input and output. Neither is persisted."""

from pydantic import Field

from core.models.base import WireModel


class QuoteRequest(WireModel):
    """
    What the storefront calculator submits.

    square_footage is only checked for positivity here; the HTTP request
    model applies the storefront's minimum.
    """

    service_key: str = Field(..., alias="service", min_length=1)
    square_footage: int
    window_count: int | None = Field(None, ge=0)
    stories: str | None = None
    extras: list[str] = Field(default_factory=list)
    promo_code: str | None = None


class QuoteResult(WireModel):
    """Itemized cost breakdown."""

    base_price: int
    size_factor: int
    story_multiplier: float
    extras_total: float
    subtotal: int
    discount: int = Field(0, description="Percent applied; 0 without a promo code")
    discount_amount: int = 0
    total_cost: int
    promo_code: str | None = None
