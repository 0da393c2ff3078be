"""Rate limiting for admin login attempts.

Uses Valkey with sliding window TTL - each attempt resets the expiry.
Attackers guessing access codes hit an ever-extending lockout.
"""

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.exceptions import RateLimitedError


class RateLimiter:
    """Rate limiting for login attempts per client IP using Valkey."""

    KEY_PREFIX = "ratelimit:login:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._config = config
        self._window_seconds = config.login_window_minutes * 60

    def _key(self, client: str) -> str:
        return f"{self.KEY_PREFIX}{client}"

    def check_rate_limit(self, client: str) -> None:
        """Check rate limit and increment counter.

        Sliding window: TTL resets on every attempt. Hammering extends lockout.

        Raises:
            RateLimitedError: If rate limit exceeded.
        """
        key = self._key(client)

        count = self._valkey.incr(key)

        # Reset TTL on every attempt (sliding window)
        self._valkey.expire(key, self._window_seconds)

        if count > self._config.login_attempt_limit:
            ttl = self._valkey.ttl(key)
            retry_after = max(ttl, 1)  # At least 1 second
            raise RateLimitedError(retry_after_seconds=retry_after)

    def reset_rate_limit(self, client: str) -> None:
        """Reset rate limit after successful login."""
        self._valkey.delete(self._key(client))

    def get_remaining_attempts(self, client: str) -> int:
        """Get remaining attempts before rate limit."""
        current = self._valkey.get(self._key(client))

        if current is None:
            return self._config.login_attempt_limit

        remaining = self._config.login_attempt_limit - int(current)
        return max(remaining, 0)
