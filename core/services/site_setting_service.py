"""
Site settings: editable storefront copy and flags addressed by key.

Updating an unknown key creates it.
"""

import logging

from psycopg2.errors import UniqueViolation
from pydantic import ValidationError

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import ChangeEvent, ResourceKind
from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.models import SiteSetting, SiteSettingCreate, SiteSettingUpdate, SettingType
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"value", "type", "category", "description"}


class SiteSettingService:
    """Service for site setting operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    def create(self, data: SiteSettingCreate) -> SiteSetting:
        """
        Raises:
            ConflictError: If the key is already taken
        """
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO site_settings (key, value, type, category, description, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    data.key, data.value, data.type.value,
                    data.category, data.description, now_utc()
                )
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Site setting '{data.key}' already exists") from e

        setting = SiteSetting.model_validate(row)

        self.audit.log_change(
            entity_type="site_setting",
            entity_id=setting.key,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        self.event_bus.publish(ChangeEvent.created(ResourceKind.SITE_SETTING, setting))

        return setting

    def get(self, key: str) -> SiteSetting | None:
        row = self.postgres.execute_single(
            "SELECT * FROM site_settings WHERE key = %s",
            (key,)
        )

        if row is None:
            return None

        return SiteSetting.model_validate(row)

    def list_all(self) -> list[SiteSetting]:
        """All settings grouped by category, then key."""
        rows = self.postgres.execute(
            "SELECT * FROM site_settings ORDER BY category ASC, key ASC"
        )

        return [SiteSetting.model_validate(row) for row in rows]

    def update(self, key: str, data: SiteSettingUpdate) -> SiteSetting:
        """
        Set a setting's value (and optionally type/category/description).

        Raises:
            InvalidInputError: If the key is new and not a valid setting key
        """
        current = self.get(key)
        if current is None:
            return self._create_from_update(key, data)

        updates = data.model_dump(exclude_none=True)

        if "type" in updates and hasattr(updates["type"], "value"):
            updates["type"] = updates["type"].value

        valid_updates = {k: v for k, v in updates.items() if k in _UPDATABLE_COLUMNS}

        set_parts = []
        params = []
        for field, value in valid_updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)

        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(key)

        row = self.postgres.execute_returning(
            f"""
            UPDATE site_settings
            SET {', '.join(set_parts)}
            WHERE key = %s
            RETURNING *
            """,
            tuple(params)
        )[0]

        updated = SiteSetting.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="site_setting",
                entity_id=key,
                action=AuditAction.UPDATE,
                changes=changes
            )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.SITE_SETTING, updated))

        return updated

    def delete(self, key: str) -> None:
        """
        Raises:
            NotFoundError: If the key does not exist
        """
        current = self.get(key)
        if current is None:
            raise NotFoundError("Site setting", key)

        self.postgres.execute_returning(
            "DELETE FROM site_settings WHERE key = %s RETURNING id",
            (key,)
        )

        self.audit.log_change(
            entity_type="site_setting",
            entity_id=key,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )
        self.event_bus.publish(ChangeEvent.deleted(ResourceKind.SITE_SETTING, key=key))

    def _create_from_update(self, key: str, data: SiteSettingUpdate) -> SiteSetting:
        try:
            create = SiteSettingCreate(
                key=key,
                value=data.value,
                type=data.type or SettingType.TEXT,
                category=data.category or "general",
                description=data.description,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid site setting key '{key[:100]}'") from e
        logger.info(f"Creating site setting '{key}' from update")
        return self.create(create)
