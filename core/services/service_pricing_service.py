"""
Service pricing for the quote calculator and the storefront service list.

Pricing rows are addressed by service_key, the slug the storefront sends in
quote requests. Updating a key that does not exist creates it, so the admin
pricing table can be edited cell by cell. Deletes are soft: historical quote
submissions keep pointing at a key that still resolves for audit.
"""

import logging

from psycopg2.errors import UniqueViolation
from pydantic import ValidationError

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import ChangeEvent, ResourceKind
from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.models import ServicePricing, ServicePricingCreate, ServicePricingUpdate
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {
    "name", "base_price", "enabled", "requires_stories", "description"
}


class ServicePricingService:
    """Service for service pricing operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    def create(self, data: ServicePricingCreate) -> ServicePricing:
        """
        Add a priced service.

        Raises:
            ConflictError: If the service key is already taken
        """
        try:
            row = self._insert(data)
        except UniqueViolation as e:
            raise ConflictError(f"Service '{data.service_key}' already exists") from e

        pricing = ServicePricing.model_validate(row)

        self.audit.log_change(
            entity_type="service_pricing",
            entity_id=pricing.service_key,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        self.event_bus.publish(ChangeEvent.created(ResourceKind.SERVICE_PRICING, pricing))

        return pricing

    def get_by_key(self, service_key: str) -> ServicePricing | None:
        """
        Get pricing by service key.

        Returns:
            Pricing if found and not deleted, None otherwise.
        """
        row = self.postgres.execute_single(
            "SELECT * FROM service_pricing WHERE service_key = %s AND deleted_at IS NULL",
            (service_key,)
        )

        if row is None:
            return None

        return ServicePricing.model_validate(row)

    def list_all(self) -> list[ServicePricing]:
        """All non-deleted pricing rows, enabled or not, by name."""
        rows = self.postgres.execute(
            """
            SELECT * FROM service_pricing
            WHERE deleted_at IS NULL
            ORDER BY name ASC
            """
        )

        return [ServicePricing.model_validate(row) for row in rows]

    def list_enabled(self) -> list[ServicePricing]:
        """Services offered on the storefront, by name."""
        rows = self.postgres.execute(
            """
            SELECT * FROM service_pricing
            WHERE enabled = true AND deleted_at IS NULL
            ORDER BY name ASC
            """
        )

        return [ServicePricing.model_validate(row) for row in rows]

    def update(self, service_key: str, data: ServicePricingUpdate) -> ServicePricing:
        """
        Update pricing fields, creating the row if the key is unknown.

        A soft-deleted key is brought back by an update.

        Raises:
            InvalidInputError: If the key is new and name or base_price is missing
        """
        current = self._get_including_deleted(service_key)
        if current is None:
            return self._create_from_update(service_key, data)

        updates = data.model_dump(exclude_none=True)

        for field in updates:
            if field not in _UPDATABLE_COLUMNS:
                logger.warning(
                    f"Attempted to update unknown field '{field}' on service pricing {service_key}"
                )

        valid_updates = {k: v for k, v in updates.items() if k in _UPDATABLE_COLUMNS}
        if not valid_updates and current.deleted_at is None:
            return current

        set_parts = []
        params = []
        for field, value in valid_updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)

        set_parts.append("deleted_at = NULL")
        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(service_key)

        row = self.postgres.execute_returning(
            f"""
            UPDATE service_pricing
            SET {', '.join(set_parts)}
            WHERE service_key = %s
            RETURNING *
            """,
            tuple(params)
        )[0]

        updated = ServicePricing.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="service_pricing",
                entity_id=service_key,
                action=AuditAction.UPDATE,
                changes=changes
            )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.SERVICE_PRICING, updated))

        return updated

    def delete(self, service_key: str) -> None:
        """
        Soft delete a service. The calculator stops pricing it immediately.

        Raises:
            NotFoundError: If no live row has this key
        """
        current = self.get_by_key(service_key)
        if current is None:
            raise NotFoundError("Service pricing", service_key)

        now = now_utc()
        self.postgres.execute_returning(
            """
            UPDATE service_pricing
            SET deleted_at = %s, updated_at = %s
            WHERE service_key = %s
            RETURNING id
            """,
            (now, now, service_key)
        )

        self.audit.log_change(
            entity_type="service_pricing",
            entity_id=service_key,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )
        self.event_bus.publish(ChangeEvent.deleted(ResourceKind.SERVICE_PRICING, key=service_key))

    def _get_including_deleted(self, service_key: str) -> ServicePricing | None:
        row = self.postgres.execute_single(
            "SELECT * FROM service_pricing WHERE service_key = %s",
            (service_key,)
        )
        return ServicePricing.model_validate(row) if row is not None else None

    def _create_from_update(self, service_key: str, data: ServicePricingUpdate) -> ServicePricing:
        if data.name is None or data.base_price is None:
            raise InvalidInputError(
                f"Service '{service_key}' does not exist; name and basePrice are required to create it"
            )

        try:
            create = ServicePricingCreate(
                service_key=service_key,
                name=data.name,
                base_price=data.base_price,
                enabled=True if data.enabled is None else data.enabled,
                requires_stories=bool(data.requires_stories),
                description=data.description,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid service key '{service_key}'") from e
        logger.info(f"Creating service pricing '{service_key}' from update")
        return self.create(create)

    def _insert(self, data: ServicePricingCreate) -> dict:
        now = now_utc()
        return self.postgres.execute_returning(
            """
            INSERT INTO service_pricing (
                service_key, name, base_price, enabled,
                requires_stories, description, updated_at
            ) VALUES (
                %s, %s, %s, %s,
                %s, %s, %s
            )
            RETURNING *
            """,
            (
                data.service_key, data.name, data.base_price, data.enabled,
                data.requires_stories, data.description, now
            )
        )[0]
