"""
Domain events for the storefront back office.

Immutable records of state changes. A service publishes what happened on the
EventBus; handlers react without the service knowing who is listening.

Event categories:
- ChangeEvent: an admin created, updated, or deleted a storefront resource.
  Forwarded to every connected browser tab so it can refetch.
- QuoteAccepted: a quote request moved to ACCEPTED; its promo code (if any)
  is redeemed.

Events carry the resulting resource so handlers never re-read it.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base class for all domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


# =============================================================================
# RESOURCE CHANGE EVENTS
# =============================================================================


class ResourceKind(str, Enum):
    """Admin-editable resources whose changes are pushed to browsers."""

    SITE_SETTING = "site-setting"
    SERVICE_PRICING = "service-pricing"
    IMAGE_ASSET = "image-asset"
    COLOR_THEME = "color-theme"
    PROMO_CODE = "promo-code"


class ChangeAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeEvent(DomainEvent):
    """
    A storefront resource changed.

    payload is the resource in wire (camelCase) form for created/updated, and
    the bare identifier ({"id": ...} or {"key": ...}) for deleted.
    """
    resource: ResourceKind
    action: ChangeAction
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        """Wire type, e.g. 'service-pricing-updated'."""
        return f"{self.resource.value}-{self.action.value}"

    def to_message(self) -> dict[str, Any]:
        return {"type": self.type, "data": self.payload}

    def to_json(self) -> str:
        return json.dumps(self.to_message(), separators=(",", ":"))

    @classmethod
    def created(cls, resource: ResourceKind, model: Any) -> "ChangeEvent":
        return cls(resource=resource, action=ChangeAction.CREATED, payload=model.to_wire())

    @classmethod
    def updated(cls, resource: ResourceKind, model: Any) -> "ChangeEvent":
        return cls(resource=resource, action=ChangeAction.UPDATED, payload=model.to_wire())

    @classmethod
    def deleted(cls, resource: ResourceKind, **identifier: Any) -> "ChangeEvent":
        return cls(resource=resource, action=ChangeAction.DELETED, payload=dict(identifier))


# =============================================================================
# QUOTE SUBMISSION EVENTS
# =============================================================================


@dataclass(frozen=True)
class QuoteAccepted(DomainEvent):
    """A quote request was accepted by the business."""
    submission: Any = None  # QuoteSubmission; Any avoids a models import cycle

    @classmethod
    def create(cls, submission: Any) -> "QuoteAccepted":
        return cls(submission=submission)
