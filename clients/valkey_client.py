"""
Valkey (Redis-compatible) client for admin sessions and login rate limiting.

Thin wrapper around redis-py. Connection URL from Vault. Fails fast: a
connection problem raises, it never degrades to an empty answer.
"""

import json
import logging

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    Key/value access for short-lived auth state.

    Usage:
        valkey = ValkeyClient("redis://localhost:6379/0")
        valkey.set_json("session:abc", {"admin_id": "..."}, expire_seconds=3600)
        data = valkey.get_json("session:abc")  # None if missing or expired
    """

    def __init__(self, url: str):
        """
        Connect and verify with PING.

        Raises:
            redis.ConnectionError: If Valkey is unreachable
        """
        self._client = redis.from_url(url, decode_responses=True)
        self._client.ping()
        logger.info("ValkeyClient connected")

    def ping(self) -> bool:
        """Health check. Raises redis.ConnectionError if unreachable."""
        self._client.ping()
        return True

    def get(self, key: str) -> str | None:
        """Value for key, or None if absent."""
        return self._client.get(key)

    def set(self, key: str, value: str, expire_seconds: int | None = None) -> None:
        """Set key, optionally with a TTL in seconds."""
        if expire_seconds is not None:
            self._client.setex(key, expire_seconds, value)
        else:
            self._client.set(key, value)

    def delete(self, key: str) -> bool:
        """Delete key. True if it existed."""
        return self._client.delete(key) > 0

    def incr(self, key: str) -> int:
        """Increment counter, creating it at 1. Returns the new value."""
        return self._client.incr(key)

    def expire(self, key: str, seconds: int) -> bool:
        """(Re)set TTL on an existing key. False if key does not exist."""
        return bool(self._client.expire(key, seconds))

    def ttl(self, key: str) -> int:
        """Remaining TTL: -2 missing, -1 no expiry, otherwise seconds."""
        return self._client.ttl(key)

    def set_json(self, key: str, value: dict | list, expire_seconds: int | None = None) -> None:
        """Store a JSON-serialized dict or list."""
        self.set(key, json.dumps(value), expire_seconds)

    def get_json(self, key: str) -> dict | list | None:
        """
        Load a JSON value.

        Returns None if key doesn't exist.
        Raises ValueError if the stored value is not valid JSON.
        """
        value = self.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}")

    def close(self) -> None:
        """Close the connection."""
        self._client.close()
        logger.info("ValkeyClient closed")
