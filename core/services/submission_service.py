"""
Storefront form submissions: free-quote requests and contact messages.

Visitors create them; admins read them and move quote requests through
their follow-up states. Only the first acceptance of a quote publishes
QuoteAccepted, which redeems the promo code the visitor entered (see
core/handlers); accepted_at records that it happened.
"""

import logging

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction
from core.event_bus import EventBus
from core.events import QuoteAccepted
from core.exceptions import NotFoundError
from core.models import (
    ContactMessage, ContactMessageCreate,
    QuoteStatus, QuoteSubmission, QuoteSubmissionCreate,
)
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class SubmissionService:
    """Service for quote request and contact message operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger, event_bus: EventBus):
        self.postgres = postgres
        self.audit = audit
        self.event_bus = event_bus

    # =========================================================================
    # QUOTE REQUESTS
    # =========================================================================

    def create_quote(self, data: QuoteSubmissionCreate) -> QuoteSubmission:
        """
        Store a free-quote request as PENDING.

        The promo code is kept as typed; it is only checked when the quote
        is accepted.
        """
        promo_code = (data.promo_code or "").strip() or None

        row = self.postgres.execute_returning(
            """
            INSERT INTO quote_submissions (
                name, email, phone, address, service,
                message, promo_code, status, created_at
            ) VALUES (
                %s, %s, %s, %s, %s,
                %s, %s, %s, %s
            )
            RETURNING *
            """,
            (
                data.name, data.email, data.phone, data.address, data.service,
                data.message, promo_code, QuoteStatus.PENDING.value, now_utc()
            )
        )[0]

        submission = QuoteSubmission.model_validate(row)
        logger.info(f"Quote request {submission.id} received for '{submission.service}'")
        return submission

    def get_quote(self, submission_id: int) -> QuoteSubmission | None:
        row = self.postgres.execute_single(
            "SELECT * FROM quote_submissions WHERE id = %s",
            (submission_id,)
        )

        if row is None:
            return None

        return QuoteSubmission.model_validate(row)

    def list_quotes(self, status: QuoteStatus | None = None) -> list[QuoteSubmission]:
        """Quote requests, newest first, optionally filtered by status."""
        if status is None:
            rows = self.postgres.execute(
                "SELECT * FROM quote_submissions ORDER BY created_at DESC, id DESC"
            )
        else:
            rows = self.postgres.execute(
                """
                SELECT * FROM quote_submissions
                WHERE status = %s
                ORDER BY created_at DESC, id DESC
                """,
                (status.value,)
            )

        return [QuoteSubmission.model_validate(row) for row in rows]

    def update_status(self, submission_id: int, status: QuoteStatus) -> QuoteSubmission:
        """
        Move a quote request to a new follow-up state.

        Raises:
            NotFoundError: If no request has this id
        """
        current = self.get_quote(submission_id)
        if current is None:
            raise NotFoundError("Quote request", submission_id)

        if current.status == status:
            return current

        row = self.postgres.execute_returning(
            """
            UPDATE quote_submissions
            SET status = %s
            WHERE id = %s
            RETURNING *
            """,
            (status.value, submission_id)
        )[0]

        updated = QuoteSubmission.model_validate(row)

        self.audit.log_change(
            entity_type="quote_submission",
            entity_id=submission_id,
            action=AuditAction.UPDATE,
            changes={"status": {"old": current.status.value, "new": status.value}}
        )

        if status == QuoteStatus.ACCEPTED:
            first = self._claim_first_acceptance(submission_id)
            if first is not None:
                updated = first
                self.event_bus.publish(QuoteAccepted.create(submission=updated))
            else:
                logger.info(f"Quote request {submission_id} re-accepted; promo code already handled")

        return updated

    def _claim_first_acceptance(self, submission_id: int) -> QuoteSubmission | None:
        """
        Stamp accepted_at if it is still unset.

        Returns the stamped row, or None when an earlier (or concurrent)
        acceptance already claimed it.
        """
        rows = self.postgres.execute_returning(
            """
            UPDATE quote_submissions
            SET accepted_at = %s
            WHERE id = %s AND accepted_at IS NULL
            RETURNING *
            """,
            (now_utc(), submission_id)
        )

        if not rows:
            return None

        return QuoteSubmission.model_validate(rows[0])

    # =========================================================================
    # CONTACT MESSAGES
    # =========================================================================

    def create_contact(self, data: ContactMessageCreate) -> ContactMessage:
        row = self.postgres.execute_returning(
            """
            INSERT INTO contact_submissions (name, email, phone, message, created_at)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING *
            """,
            (data.name, data.email, data.phone, data.message, now_utc())
        )[0]

        contact = ContactMessage.model_validate(row)
        logger.info(f"Contact message {contact.id} received")
        return contact

    def list_contacts(self) -> list[ContactMessage]:
        rows = self.postgres.execute(
            "SELECT * FROM contact_submissions ORDER BY created_at DESC, id DESC"
        )

        return [ContactMessage.model_validate(row) for row in rows]
