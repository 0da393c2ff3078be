"""Database operations for authentication.

Uses the admin_accounts table. Access codes are never stored; only their
SHA-256 digest is, and lookups compare digests in constant time.
"""

import hashlib
import hmac
from uuid import UUID

from clients.postgres_client import PostgresClient
from auth.types import AdminAccount
from utils.timezone import now_utc


def hash_access_code(access_code: str) -> str:
    """Hex SHA-256 digest of an access code."""
    return hashlib.sha256(access_code.encode("utf-8")).hexdigest()


def _to_account(row: dict) -> AdminAccount:
    return AdminAccount(
        id=UUID(row["id"]) if isinstance(row["id"], str) else row["id"],
        name=row["name"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        last_login_at=row["last_login_at"],
    )


class AdminDatabase:
    """Database operations for admin accounts."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def find_by_access_code(self, access_code: str) -> AdminAccount | None:
        """Find the account whose access code matches.

        The admin table is a handful of rows, so every digest is compared
        and the timing does not depend on which (if any) matches.
        """
        digest = hash_access_code(access_code)
        rows = self._db.execute(
            """SELECT id, name, access_code_hash, is_active, created_at, last_login_at
               FROM admin_accounts"""
        )

        match = None
        for row in rows:
            if hmac.compare_digest(row["access_code_hash"], digest) and match is None:
                match = row

        return _to_account(match) if match is not None else None

    def get_by_id(self, admin_id: UUID) -> AdminAccount | None:
        row = self._db.execute_single(
            """SELECT id, name, is_active, created_at, last_login_at
               FROM admin_accounts WHERE id = %s""",
            (str(admin_id),),
        )
        if row is None:
            return None
        return _to_account(row)

    def create_admin(self, name: str, access_code: str) -> AdminAccount:
        """Create an admin account for an access code."""
        rows = self._db.execute_returning(
            """INSERT INTO admin_accounts (name, access_code_hash)
               VALUES (%s, %s)
               RETURNING id, name, is_active, created_at, last_login_at""",
            (name, hash_access_code(access_code)),
        )
        return _to_account(rows[0])

    def update_last_login(self, admin_id: UUID) -> None:
        """Update last_login_at to current time."""
        self._db.execute_returning(
            "UPDATE admin_accounts SET last_login_at = %s WHERE id = %s RETURNING id",
            (now_utc(), str(admin_id)),
        )

    def deactivate_admin(self, admin_id: UUID) -> bool:
        """Set admin as inactive (login frozen).

        Returns:
            True if the account was found and deactivated, False if not found.
        """
        rows = self._db.execute_returning(
            "UPDATE admin_accounts SET is_active = false WHERE id = %s RETURNING id",
            (str(admin_id),),
        )
        return len(rows) > 0

    def count_admins(self) -> int:
        """Number of admin accounts, active or not."""
        return self._db.execute_scalar("SELECT count(*) FROM admin_accounts") or 0
