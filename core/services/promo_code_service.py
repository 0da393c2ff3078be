"""
Promo code administration and redemption.

Codes are addressed by numeric id in the admin UI and by their exact,
case-sensitive text at checkout. usage_count is never written by an admin
update; it only moves through redeem(), one atomic increment at a time, so
two concurrent redemptions can never push a code past its limit.
"""

import logging

from psycopg2.errors import UniqueViolation

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.event_bus import EventBus
from core.events import ChangeEvent, ResourceKind
from core.exceptions import ConflictError, InvalidPromoCodeError, NotFoundError
from core.models import PromoCode, PromoCodeCreate, PromoCodeUpdate
from core.services.promo_validator import PromoRejection, evaluate_promo
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {
    "code", "discount", "is_active", "usage_limit", "expires_at"
}

# Columns that may be explicitly cleared with null
_NULLABLE_COLUMNS = {"usage_limit", "expires_at"}


class PromoCodeService:
    """Service for promo code operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    def create(self, data: PromoCodeCreate) -> PromoCode:
        """
        Create a promo code with zero uses.

        Raises:
            ConflictError: If the code text is already taken
        """
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO promo_codes (
                    code, discount, is_active, usage_limit,
                    usage_count, expires_at, created_at
                ) VALUES (
                    %s, %s, %s, %s,
                    0, %s, %s
                )
                RETURNING *
                """,
                (
                    data.code, data.discount, data.is_active, data.usage_limit,
                    data.expires_at, now_utc()
                )
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Promo code '{data.code}' already exists") from e

        promo = PromoCode.model_validate(row)

        self.audit.log_change(
            entity_type="promo_code",
            entity_id=promo.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        self.event_bus.publish(ChangeEvent.created(ResourceKind.PROMO_CODE, promo))

        return promo

    def get_by_id(self, promo_id: int) -> PromoCode | None:
        row = self.postgres.execute_single(
            "SELECT * FROM promo_codes WHERE id = %s",
            (promo_id,)
        )

        if row is None:
            return None

        return PromoCode.model_validate(row)

    def get_by_code(self, code: str) -> PromoCode | None:
        """Exact, case-sensitive lookup."""
        row = self.postgres.execute_single(
            "SELECT * FROM promo_codes WHERE code = %s",
            (code,)
        )

        if row is None:
            return None

        return PromoCode.model_validate(row)

    def list_all(self) -> list[PromoCode]:
        """All codes, newest first."""
        rows = self.postgres.execute(
            "SELECT * FROM promo_codes ORDER BY created_at DESC, id DESC"
        )

        return [PromoCode.model_validate(row) for row in rows]

    def update(self, promo_id: int, data: PromoCodeUpdate) -> PromoCode:
        """
        Update the fields present in the request body.

        Raises:
            NotFoundError: If no code has this id
            ConflictError: If renaming onto an existing code
        """
        current = self.get_by_id(promo_id)
        if current is None:
            raise NotFoundError("Promo code", promo_id)

        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in _NULLABLE_COLUMNS
        }

        for field in updates:
            if field not in _UPDATABLE_COLUMNS:
                logger.warning(
                    f"Attempted to update unknown field '{field}' on promo code {promo_id}"
                )

        valid_updates = {k: v for k, v in updates.items() if k in _UPDATABLE_COLUMNS}
        if not valid_updates:
            return current

        set_parts = []
        params = []
        for field, value in valid_updates.items():
            set_parts.append(f"{field} = %s")
            params.append(value)
        params.append(promo_id)

        try:
            row = self.postgres.execute_returning(
                f"""
                UPDATE promo_codes
                SET {', '.join(set_parts)}
                WHERE id = %s
                RETURNING *
                """,
                tuple(params)
            )[0]
        except UniqueViolation as e:
            raise ConflictError(f"Promo code '{valid_updates.get('code')}' already exists") from e

        updated = PromoCode.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="promo_code",
                entity_id=promo_id,
                action=AuditAction.UPDATE,
                changes=changes
            )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.PROMO_CODE, updated))

        return updated

    def delete(self, promo_id: int) -> None:
        """
        Permanently remove a code.

        Raises:
            NotFoundError: If no code has this id
        """
        current = self.get_by_id(promo_id)
        if current is None:
            raise NotFoundError("Promo code", promo_id)

        self.postgres.execute_returning(
            "DELETE FROM promo_codes WHERE id = %s RETURNING id",
            (promo_id,)
        )

        self.audit.log_change(
            entity_type="promo_code",
            entity_id=promo_id,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )
        self.event_bus.publish(ChangeEvent.deleted(ResourceKind.PROMO_CODE, id=promo_id))

    def redeem(self, code: str) -> PromoCode:
        """
        Use up one redemption of a code.

        The validity checks and the increment are one statement, so the
        limit holds under concurrent redemptions.

        Raises:
            InvalidPromoCodeError: If the code is not redeemable right now
        """
        now = now_utc()
        rows = self.postgres.execute_returning(
            """
            UPDATE promo_codes
            SET usage_count = usage_count + 1
            WHERE code = %s
              AND is_active = true
              AND (expires_at IS NULL OR expires_at >= %s)
              AND (usage_limit IS NULL OR usage_count < usage_limit)
            RETURNING *
            """,
            (code, now)
        )

        if not rows:
            result = evaluate_promo(self.get_by_code(code), now)
            # A valid re-read means another redemption took the last use in between
            reason = result.reason or PromoRejection.EXHAUSTED
            logger.warning(f"Redemption of promo code {code!r} refused: {reason.value}")
            raise InvalidPromoCodeError(code, reason)

        promo = PromoCode.model_validate(rows[0])

        self.audit.log_change(
            entity_type="promo_code",
            entity_id=promo.id,
            action=AuditAction.REDEEM,
            changes={"usage_count": {"old": promo.usage_count - 1, "new": promo.usage_count}}
        )
        self.event_bus.publish(ChangeEvent.updated(ResourceKind.PROMO_CODE, promo))

        logger.info(f"Promo code {code!r} redeemed ({promo.usage_count} uses)")
        return promo
