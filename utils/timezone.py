"""UTC time helpers. Every timestamp stored or compared is UTC-aware."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Promo expiry checks and session expiry both go through this, so tests
    can patch a single function.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert an aware datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def assume_utc(dt: datetime | None) -> datetime | None:
    """
    Interpret a naive datetime as UTC; convert aware ones.

    Admin forms submit bare dates like "2025-12-31" for promo expiry.
    Those mean midnight UTC, the same instant the storefront has always used.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso(iso_string: str) -> datetime:
    """
    Parse ISO 8601 datetime string to UTC datetime.

    Raises ValueError if string has no timezone info.
    """
    dt = datetime.fromisoformat(iso_string)
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot parse naive datetime string. "
            "Include timezone offset (e.g., 'Z' or '+00:00')."
        )
    return to_utc(dt)
