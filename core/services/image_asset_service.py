"""Image assets (hero, logo, team, gallery...) referenced by the storefront."""

import logging

from psycopg2.errors import UniqueViolation

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import ChangeEvent, ResourceKind
from core.exceptions import ConflictError, NotFoundError
from core.models import ImageAsset, ImageAssetCreate, ImageAssetUpdate
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"key", "url", "alt_text", "category", "is_active"}


class ImageAssetService:
    """Service for image asset operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    def create(self, data: ImageAssetCreate) -> ImageAsset:
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO image_assets (key, url, alt_text, category, is_active, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (
                    data.key, data.url, data.alt_text,
                    data.category, data.is_active, now_utc()
                )
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Image asset '{data.key}' already exists") from e

        asset = ImageAsset.model_validate(row)

        self.audit.log_change(
            entity_type="image_asset",
            entity_id=asset.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        self.event_bus.publish(ChangeEvent.created(ResourceKind.IMAGE_ASSET, asset))

        return asset

    def get_by_id(self, asset_id: int) -> ImageAsset | None:
        row = self.postgres.execute_single(
            "SELECT * FROM image_assets WHERE id = %s",
            (asset_id,)
        )

        if row is None:
            return None

        return ImageAsset.model_validate(row)

    def get_by_key(self, key: str) -> ImageAsset | None:
        row = self.postgres.execute_single(
            "SELECT * FROM image_assets WHERE key = %s",
            (key,)
        )

        if row is None:
            return None

        return ImageAsset.model_validate(row)

    def list_all(self, active_only: bool = False) -> list[ImageAsset]:
        query = "SELECT * FROM image_assets"
        if active_only:
            query += " WHERE is_active = true"
        rows = self.postgres.execute(query + " ORDER BY category ASC, key ASC")

        return [ImageAsset.model_validate(row) for row in rows]

    def list_by_category(self, category: str, active_only: bool = False) -> list[ImageAsset]:
        query = "SELECT * FROM image_assets WHERE category = %s"
        if active_only:
            query += " AND is_active = true"
        rows = self.postgres.execute(query + " ORDER BY key ASC", (category,))

        return [ImageAsset.model_validate(row) for row in rows]

    def update(self, asset_id: int, data: ImageAssetUpdate) -> ImageAsset:
        """
        Raises:
            NotFoundError: If no asset has this id
            ConflictError: If renaming onto an existing key
        """
        current = self.get_by_id(asset_id)
        if current is None:
            raise NotFoundError("Image asset", asset_id)

        updates = data.model_dump(exclude_unset=True)
        # alt_text is the only column that may be cleared
        valid_updates = {
            k: v for k, v in updates.items()
            if k in _UPDATABLE_COLUMNS and (v is not None or k == "alt_text")
        }
        if not valid_updates:
            return current

        set_parts = []
        params = []
        for field, value in valid_updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)

        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(asset_id)

        try:
            row = self.postgres.execute_returning(
                f"""
                UPDATE image_assets
                SET {', '.join(set_parts)}
                WHERE id = %s
                RETURNING *
                """,
                tuple(params)
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Image asset '{valid_updates.get('key')}' already exists") from e

        updated = ImageAsset.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="image_asset",
                entity_id=asset_id,
                action=AuditAction.UPDATE,
                changes=changes
            )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.IMAGE_ASSET, updated))

        return updated

    def delete(self, asset_id: int) -> None:
        """
        Raises:
            NotFoundError: If no asset has this id
        """
        current = self.get_by_id(asset_id)
        if current is None:
            raise NotFoundError("Image asset", asset_id)

        self.postgres.execute_returning(
            "DELETE FROM image_assets WHERE id = %s RETURNING id",
            (asset_id,)
        )

        self.audit.log_change(
            entity_type="image_asset",
            entity_id=asset_id,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )
        self.event_bus.publish(ChangeEvent.deleted(ResourceKind.IMAGE_ASSET, id=asset_id))
