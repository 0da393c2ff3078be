"""Tests for SessionManager."""

from datetime import timedelta

import pytest

from auth.config import AuthConfig
from auth.exceptions import SessionExpiredError
from auth.session import SessionManager
from utils.timezone import now_utc


@pytest.fixture
def config():
    return AuthConfig(session_expiry_hours=2)


@pytest.fixture
def session_manager(valkey, config):
    return SessionManager(valkey, config)


class TestCreateSession:

    def test_stores_session_with_ttl(self, session_manager, valkey, test_admin_id):
        session = session_manager.create_session(test_admin_id)

        key = f"session:{session.token}"
        assert valkey.get_json(key)["admin_id"] == str(test_admin_id)
        assert valkey.ttl(key) == 2 * 3600
        assert session.expires_at - session.created_at == timedelta(hours=2)

    def test_tokens_are_unique(self, session_manager, test_admin_id):
        first = session_manager.create_session(test_admin_id)
        second = session_manager.create_session(test_admin_id)

        assert first.token != second.token
        assert len(first.token) >= 32


class TestValidateSession:

    def test_returns_stored_admin(self, session_manager, test_admin_id):
        token = session_manager.create_session(test_admin_id).token

        session = session_manager.validate_session(token)

        assert session.admin_id == test_admin_id

    def test_unknown_token_raises(self, session_manager):
        with pytest.raises(SessionExpiredError):
            session_manager.validate_session("no-such-token")

    def test_past_expiry_raises_and_removes(self, session_manager, valkey, test_admin_id):
        token = session_manager.create_session(test_admin_id).token
        key = f"session:{token}"
        data = valkey.get_json(key)
        data["expires_at"] = (now_utc() - timedelta(minutes=1)).isoformat()
        valkey.set_json(key, data)

        with pytest.raises(SessionExpiredError):
            session_manager.validate_session(token)

        assert valkey.get(key) is None

    def test_activity_extends_expiry(self, session_manager, valkey, test_admin_id):
        token = session_manager.create_session(test_admin_id).token
        key = f"session:{token}"
        data = valkey.get_json(key)
        data["expires_at"] = (now_utc() + timedelta(minutes=5)).isoformat()
        valkey.set_json(key, data)

        session = session_manager.validate_session(token)

        assert session.expires_at > now_utc() + timedelta(hours=1)

    def test_no_extension_when_disabled(self, valkey, test_admin_id):
        manager = SessionManager(valkey, AuthConfig(session_extend_on_activity=False))
        token = manager.create_session(test_admin_id).token
        key = f"session:{token}"
        soon = now_utc() + timedelta(minutes=5)
        data = valkey.get_json(key)
        data["expires_at"] = soon.isoformat()
        valkey.set_json(key, data)

        session = manager.validate_session(token)

        assert session.expires_at == soon


class TestRevokeSession:

    def test_revoked_token_no_longer_validates(self, session_manager, test_admin_id):
        token = session_manager.create_session(test_admin_id).token

        session_manager.revoke_session(token)

        with pytest.raises(SessionExpiredError):
            session_manager.validate_session(token)

    def test_revoke_unknown_token_is_safe(self, session_manager):
        session_manager.revoke_session("never-issued")
