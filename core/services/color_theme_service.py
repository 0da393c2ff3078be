"""Brand color tokens. The storefront applies them as CSS variables."""

import logging

from psycopg2.errors import UniqueViolation

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import ChangeEvent, ResourceKind
from core.exceptions import ConflictError, NotFoundError
from core.models import ColorTheme, ColorThemeCreate, ColorThemeUpdate
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"key", "value", "category", "description"}


class ColorThemeService:
    """Service for color theme operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    def create(self, data: ColorThemeCreate) -> ColorTheme:
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO color_themes (key, value, category, description, updated_at)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING *
                """,
                (data.key, data.value, data.category, data.description, now_utc())
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Color theme '{data.key}' already exists") from e

        theme = ColorTheme.model_validate(row)

        self.audit.log_change(
            entity_type="color_theme",
            entity_id=theme.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        self.event_bus.publish(ChangeEvent.created(ResourceKind.COLOR_THEME, theme))

        return theme

    def get_by_id(self, theme_id: int) -> ColorTheme | None:
        row = self.postgres.execute_single(
            "SELECT * FROM color_themes WHERE id = %s",
            (theme_id,)
        )

        if row is None:
            return None

        return ColorTheme.model_validate(row)

    def list_all(self) -> list[ColorTheme]:
        rows = self.postgres.execute(
            "SELECT * FROM color_themes ORDER BY category ASC, key ASC"
        )

        return [ColorTheme.model_validate(row) for row in rows]

    def update(self, theme_id: int, data: ColorThemeUpdate) -> ColorTheme:
        """
        Raises:
            NotFoundError: If no theme has this id
        """
        current = self.get_by_id(theme_id)
        if current is None:
            raise NotFoundError("Color theme", theme_id)

        updates = data.model_dump(exclude_none=True)
        valid_updates = {k: v for k, v in updates.items() if k in _UPDATABLE_COLUMNS}
        if not valid_updates:
            return current

        set_parts = []
        params = []
        for field, value in valid_updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)

        set_parts.append("updated_at = %s")
        params.append(now_utc())
        params.append(theme_id)

        try:
            row = self.postgres.execute_returning(
                f"""
                UPDATE color_themes
                SET {', '.join(set_parts)}
                WHERE id = %s
                RETURNING *
                """,
                tuple(params)
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Color theme '{valid_updates.get('key')}' already exists") from e

        updated = ColorTheme.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="color_theme",
                entity_id=theme_id,
                action=AuditAction.UPDATE,
                changes=changes
            )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.COLOR_THEME, updated))

        return updated

    def delete(self, theme_id: int) -> None:
        """
        Raises:
            NotFoundError: If no theme has this id
        """
        current = self.get_by_id(theme_id)
        if current is None:
            raise NotFoundError("Color theme", theme_id)

        self.postgres.execute_returning(
            "DELETE FROM color_themes WHERE id = %s RETURNING id",
            (theme_id,)
        )

        self.audit.log_change(
            entity_type="color_theme",
            entity_id=theme_id,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )
        self.event_bus.publish(ChangeEvent.deleted(ResourceKind.COLOR_THEME, id=theme_id))
