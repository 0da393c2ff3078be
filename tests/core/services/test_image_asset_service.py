"""Tests for ImageAssetService."""

from datetime import datetime, timezone

import pytest
from psycopg2.errors import UniqueViolation

from core.audit import AuditLogger
from core.exceptions import ConflictError, NotFoundError
from core.models import ImageAssetCreate, ImageAssetUpdate
from core.services.image_asset_service import ImageAssetService


def asset_row(**overrides) -> dict:
    row = {
        "id": 4,
        "key": "logo",
        "url": "/images/logo.png",
        "alt_text": "Eco Clean Power Washing Logo",
        "category": "branding",
        "is_active": True,
        "updated_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
    }
    row.update(overrides)
    return row


@pytest.fixture
def service(db, event_bus):
    return ImageAssetService(db, AuditLogger(db), event_bus)


class TestCreate:

    def test_creates_and_publishes(self, db, service, published):
        db.execute_returning.return_value = [asset_row()]

        asset = service.create(ImageAssetCreate(
            key="logo", url="/images/logo.png", category="branding",
        ))

        assert asset.id == 4
        assert [e.type for e in published] == ["image-asset-created"]
        assert published[0].payload["altText"] == "Eco Clean Power Washing Logo"

    def test_duplicate_key_raises_conflict(self, db, service):
        db.execute_returning.side_effect = UniqueViolation("duplicate key")

        with pytest.raises(ConflictError):
            service.create(ImageAssetCreate(key="logo", url="/x.png", category="branding"))


class TestReads:

    def test_list_by_category_active_only(self, db, service):
        db.execute.return_value = [asset_row()]

        assets = service.list_by_category("branding", active_only=True)

        assert [a.key for a in assets] == ["logo"]
        query, params = db.execute.call_args.args
        assert "is_active = true" in query
        assert params == ("branding",)

    def test_list_all_includes_inactive_by_default(self, db, service):
        db.execute.return_value = []

        service.list_all()

        assert "is_active" not in db.execute.call_args.args[0]


class TestUpdate:

    def test_updates_url(self, db, service, published):
        db.execute_single.return_value = asset_row()
        db.execute_returning.return_value = [asset_row(url="/images/logo-v2.png")]

        updated = service.update(4, ImageAssetUpdate(url="/images/logo-v2.png"))

        assert updated.url == "/images/logo-v2.png"
        assert [e.type for e in published] == ["image-asset-updated"]

    def test_alt_text_can_be_cleared(self, db, service):
        db.execute_single.return_value = asset_row()
        db.execute_returning.return_value = [asset_row(alt_text=None)]

        service.update(4, ImageAssetUpdate.model_validate({"altText": None}))

        query, params = db.execute_returning.call_args.args
        assert "alt_text = %s" in query
        assert params[0] is None

    def test_missing_id_raises(self, db, service, published):
        db.execute_single.return_value = None

        with pytest.raises(NotFoundError):
            service.update(999, ImageAssetUpdate(url="/x.png"))

        assert published == []


class TestDelete:

    def test_deletes_and_publishes_id(self, db, service, published):
        db.execute_single.return_value = asset_row()
        db.execute_returning.return_value = [{"id": 4}]

        service.delete(4)

        assert published[0].type == "image-asset-deleted"
        assert published[0].payload == {"id": 4}

    def test_missing_id_raises(self, db, service):
        db.execute_single.return_value = None

        with pytest.raises(NotFoundError):
            service.delete(999)
