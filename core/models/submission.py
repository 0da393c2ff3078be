"""Storefront form submissions: free-quote requests and contact messages."""

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field

from core.models.base import WireModel


class QuoteStatus(str, Enum):
    """Follow-up state of a quote request."""

    PENDING = "pending"
    CONTACTED = "contacted"
    ACCEPTED = "accepted"    # Customer booked; redeems the attached promo code
    DECLINED = "declined"


class QuoteSubmissionCreate(WireModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=30)
    address: str = Field(..., min_length=1, max_length=500)
    service: str = Field(..., min_length=1, max_length=100)
    message: str | None = Field(None, max_length=5000)
    promo_code: str | None = Field(None, max_length=50)


class QuoteSubmission(WireModel):
    id: int
    name: str
    email: str
    phone: str
    address: str
    service: str
    message: str | None
    promo_code: str | None
    status: QuoteStatus
    accepted_at: datetime | None = None    # First acceptance; set once
    created_at: datetime


class QuoteStatusUpdate(WireModel):
    status: QuoteStatus


class ContactMessageCreate(WireModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=7, max_length=30)
    message: str = Field(..., min_length=1, max_length=5000)


class ContactMessage(WireModel):
    id: int
    name: str
    email: str
    phone: str
    message: str
    created_at: datetime
