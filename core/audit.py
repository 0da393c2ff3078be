"""
Audit trail for admin changes to storefront resources.

Every admin mutation (pricing, promo codes, settings, images, colors, quote
status) is appended here:
- Append-only (entries never modified or deleted)
- Attributed to the acting admin (NULL for system work such as seeding)
- Detailed (old and new values for updates)
"""

from enum import Enum
from typing import Any
from uuid import UUID

from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from utils.admin_context import current_admin_id_or_none
from utils.timezone import now_utc


class AuditAction(Enum):
    """Type of change made to an entity."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REDEEM = "redeem"


def compute_changes(
    old: dict[str, Any],
    new: dict[str, Any],
    exclude_fields: set[str] | None = None
) -> dict[str, dict[str, Any]]:
    """
    Field-level diff between two entity states.

    Args:
        old: Previous state of entity
        new: New state of entity
        exclude_fields: Fields to ignore (defaults to {"updated_at"})

    Returns:
        {field: {"old": old_val, "new": new_val}} for changed fields; empty if none.
    """
    exclude = exclude_fields or {"updated_at"}
    changes = {}

    for key in set(old) | set(new):
        if key in exclude:
            continue

        old_val = old.get(key)
        new_val = new.get(key)

        if old_val != new_val:
            changes[key] = {"old": old_val, "new": new_val}

    return changes


class AuditLogger:
    """
    Append-only audit log.

    Pass model_dump(mode="json") output so datetimes serialize.

    Usage:
        audit.log_change(
            entity_type="promo_code",
            entity_id=promo.id,
            action=AuditAction.UPDATE,
            changes=compute_changes(old.model_dump(mode="json"), new.model_dump(mode="json")),
        )
    """

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def log_change(
        self,
        entity_type: str,
        entity_id: int | str,
        action: AuditAction,
        changes: dict[str, Any],
        admin_id: UUID | None = None
    ) -> None:
        """
        Log an entity change.

        Args:
            entity_type: "service_pricing", "promo_code", ...
            entity_id: Numeric id or natural key of the entity
            action: What happened
            changes: {"created": {...}}, {"field": {"old", "new"}}, or {"deleted": {...}}
            admin_id: Acting admin (defaults to current context, may be None)
        """
        if admin_id is None:
            admin_id = current_admin_id_or_none()

        self.postgres.execute(
            """
            INSERT INTO audit_log (admin_id, entity_type, entity_id, action, changes, created_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            """,
            (
                admin_id,
                entity_type,
                str(entity_id),
                action.value,
                Json(changes),
                now_utc(),
            )
        )

    def get_entity_history(self, entity_type: str, entity_id: int | str) -> list[dict[str, Any]]:
        """Audit history for one entity, newest first."""
        return self.postgres.execute(
            """
            SELECT id, admin_id, entity_type, entity_id, action, changes, created_at
            FROM audit_log
            WHERE entity_type = %s AND entity_id = %s
            ORDER BY created_at DESC
            """,
            (entity_type, str(entity_id))
        )

    def get_recent_activity(self, limit: int = 100) -> list[dict[str, Any]]:
        """Most recent admin activity across all entities."""
        return self.postgres.execute(
            """
            SELECT id, admin_id, entity_type, entity_id, action, changes, created_at
            FROM audit_log
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (limit,)
        )
