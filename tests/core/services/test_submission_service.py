"""Tests for SubmissionService."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from core.audit import AuditLogger
from core.events import QuoteAccepted
from core.exceptions import NotFoundError
from core.handlers.quote_acceptance_handler import handle_quote_accepted
from core.models import ContactMessageCreate, QuoteStatus, QuoteSubmissionCreate
from core.services.submission_service import SubmissionService

ACCEPTED_AT = datetime(2026, 3, 4, 9, 30, tzinfo=timezone.utc)


def quote_row(**overrides) -> dict:
    row = {
        "id": 11,
        "name": "Dana Reyes",
        "email": "dana@example.com",
        "phone": "555-123-4567",
        "address": "12 Elm St",
        "service": "house-washing",
        "message": None,
        "promo_code": "SAVE10",
        "status": "pending",
        "created_at": datetime(2026, 3, 1, 15, 0, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


def quote_data(**overrides) -> QuoteSubmissionCreate:
    fields = {
        "name": "Dana Reyes",
        "email": "dana@example.com",
        "phone": "555-123-4567",
        "address": "12 Elm St",
        "service": "house-washing",
    }
    fields.update(overrides)
    return QuoteSubmissionCreate(**fields)


@pytest.fixture
def service(db, event_bus):
    return SubmissionService(db, AuditLogger(db), event_bus)


class TestCreateQuote:

    def test_stored_as_pending(self, db, service):
        db.execute_returning.return_value = [quote_row()]

        submission = service.create_quote(quote_data(promo_code="SAVE10"))

        assert submission.status == QuoteStatus.PENDING
        params = db.execute_returning.call_args.args[1]
        assert params[6] == "SAVE10"
        assert params[7] == "pending"

    def test_promo_code_trimmed(self, db, service):
        db.execute_returning.return_value = [quote_row()]

        service.create_quote(quote_data(promo_code="  SAVE10 "))

        assert db.execute_returning.call_args.args[1][6] == "SAVE10"

    def test_blank_promo_code_stored_as_null(self, db, service):
        db.execute_returning.return_value = [quote_row(promo_code=None)]

        service.create_quote(quote_data(promo_code="   "))

        assert db.execute_returning.call_args.args[1][6] is None

    def test_create_publishes_nothing(self, db, service, published):
        db.execute_returning.return_value = [quote_row()]

        service.create_quote(quote_data())

        assert published == []


class TestListQuotes:

    def test_filters_by_status(self, db, service):
        db.execute.return_value = [quote_row(status="contacted")]

        quotes = service.list_quotes(QuoteStatus.CONTACTED)

        assert quotes[0].status == QuoteStatus.CONTACTED
        assert db.execute.call_args.args[1] == ("contacted",)

    def test_unfiltered(self, db, service):
        db.execute.return_value = []

        assert service.list_quotes() == []
        assert "WHERE" not in db.execute.call_args.args[0]


class TestUpdateStatus:

    def test_accepting_publishes_quote_accepted(self, db, service, published):
        db.execute_single.return_value = quote_row()
        db.execute_returning.side_effect = [
            [quote_row(status="accepted")],
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
        ]

        updated = service.update_status(11, QuoteStatus.ACCEPTED)

        assert updated.status == QuoteStatus.ACCEPTED
        assert updated.accepted_at == ACCEPTED_AT
        assert len(published) == 1
        assert isinstance(published[0], QuoteAccepted)
        assert published[0].submission.promo_code == "SAVE10"

    def test_acceptance_claim_is_guarded(self, db, service):
        db.execute_single.return_value = quote_row()
        db.execute_returning.side_effect = [
            [quote_row(status="accepted")],
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
        ]

        service.update_status(11, QuoteStatus.ACCEPTED)

        claim_sql, claim_params = db.execute_returning.call_args.args
        assert "accepted_at IS NULL" in claim_sql
        assert claim_params[1] == 11

    def test_re_acceptance_publishes_nothing(self, db, service, published):
        db.execute_single.return_value = quote_row(status="contacted", accepted_at=ACCEPTED_AT)
        db.execute_returning.side_effect = [
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
            [],
        ]

        updated = service.update_status(11, QuoteStatus.ACCEPTED)

        assert updated.status == QuoteStatus.ACCEPTED
        assert published == []

    def test_losing_concurrent_acceptance_publishes_nothing(self, db, service, published):
        # Both requests read PENDING; the other one stamped accepted_at first
        db.execute_single.return_value = quote_row()
        db.execute_returning.side_effect = [
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
            [],
        ]

        service.update_status(11, QuoteStatus.ACCEPTED)

        assert published == []

    def test_promo_redeemed_once_across_reacceptance(self, db, service, event_bus):
        promo_service = Mock()
        event_bus.subscribe("QuoteAccepted", handle_quote_accepted(promo_service))

        db.execute_single.side_effect = [
            quote_row(),
            quote_row(status="accepted", accepted_at=ACCEPTED_AT),
            quote_row(status="pending", accepted_at=ACCEPTED_AT),
        ]
        db.execute_returning.side_effect = [
            [quote_row(status="accepted")],
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
            [quote_row(status="pending", accepted_at=ACCEPTED_AT)],
            [quote_row(status="accepted", accepted_at=ACCEPTED_AT)],
            [],
        ]

        service.update_status(11, QuoteStatus.ACCEPTED)
        service.update_status(11, QuoteStatus.PENDING)
        service.update_status(11, QuoteStatus.ACCEPTED)

        promo_service.redeem.assert_called_once_with("SAVE10")

    def test_other_transitions_publish_nothing(self, db, service, published):
        db.execute_single.return_value = quote_row()
        db.execute_returning.return_value = [quote_row(status="contacted")]

        service.update_status(11, QuoteStatus.CONTACTED)

        assert published == []

    def test_transition_is_audited(self, db, service):
        db.execute_single.return_value = quote_row()
        db.execute_returning.return_value = [quote_row(status="declined")]

        service.update_status(11, QuoteStatus.DECLINED)

        audit_calls = [c for c in db.execute.call_args_list if "audit_log" in c.args[0]]
        assert len(audit_calls) == 1
        params = audit_calls[0].args[1]
        assert "quote_submission" in params
        assert params[4].adapted == {"status": {"old": "pending", "new": "declined"}}

    def test_unchanged_status_is_noop(self, db, service, published):
        db.execute_single.return_value = quote_row(status="accepted")

        result = service.update_status(11, QuoteStatus.ACCEPTED)

        assert result.status == QuoteStatus.ACCEPTED
        db.execute_returning.assert_not_called()
        assert published == []

    def test_missing_id_raises(self, db, service):
        db.execute_single.return_value = None

        with pytest.raises(NotFoundError):
            service.update_status(404, QuoteStatus.CONTACTED)


class TestContacts:

    def test_create_contact(self, db, service):
        db.execute_returning.return_value = [{
            "id": 2,
            "name": "Sam",
            "email": "sam@example.com",
            "phone": "555-000-1111",
            "message": "Do you clean roofs?",
            "created_at": datetime(2026, 3, 2, tzinfo=timezone.utc),
        }]

        contact = service.create_contact(ContactMessageCreate(
            name="Sam", email="sam@example.com", phone="555-000-1111",
            message="Do you clean roofs?",
        ))

        assert contact.id == 2
        assert "contact_submissions" in db.execute_returning.call_args.args[0]
