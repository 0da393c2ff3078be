"""
PostgreSQL client with connection pooling.

Uses psycopg2 with ThreadedConnectionPool. The storefront is single-tenant,
so there is no row-level isolation; every query sees every row. Rows come
back as plain dicts ready for pydantic model_validate().

Each call is its own transaction: committed on success, rolled back if the
statement raises.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Sequence, Tuple
from uuid import UUID

import psycopg2
import psycopg2.extras
import psycopg2.pool

logger = logging.getLogger(__name__)

Params = Tuple | Dict | None

# register_default_jsonb is process-wide; do it once
_jsonb_registered = False


def _adapt(value: Any) -> Any:
    """UUIDs go over the wire as text; containers are walked."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, list):
        return [_adapt(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_adapt(v) for v in value)
    if isinstance(value, dict):
        return {k: _adapt(v) for k, v in value.items()}
    return value


class PostgresClient:
    """
    Pooled PostgreSQL access returning dict rows.

    Usage:
        db = PostgresClient(database_url)
        rows = db.execute("SELECT * FROM service_pricing WHERE enabled = true")
        row = db.execute_single(
            "SELECT * FROM promo_codes WHERE code = %s", ("SAVE10",)
        )
        db.execute_many(
            "INSERT INTO faqs (question, answer, \"order\", active) VALUES (%s, %s, %s, true)",
            [("Is it safe?", "Yes.", 0), ("How long?", "2-4 hours.", 1)],
        )
    """

    # One pool per database URL, shared by every instance in the process
    _connection_pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _pools_lock = threading.RLock()

    def __init__(self, database_url: str, min_connections: int = 2, max_connections: int = 20):
        self._database_url = database_url
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._pool()

    def _pool(self) -> psycopg2.pool.ThreadedConnectionPool:
        global _jsonb_registered

        with self._pools_lock:
            pool = self._connection_pools.get(self._database_url)
            if pool is None:
                pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=self._min_connections,
                    maxconn=self._max_connections,
                    dsn=self._database_url,
                    connect_timeout=30,
                )
                if not _jsonb_registered:
                    psycopg2.extras.register_default_jsonb(globally=True)
                    _jsonb_registered = True

                self._connection_pools[self._database_url] = pool
                logger.info("Connection pool created (max=%s)", self._max_connections)
            return pool

    @contextmanager
    def get_connection(self):
        """Borrow a pooled connection; roll back on error, always return it."""
        pool = self._pool()
        conn = pool.getconn()
        if conn is None:
            raise RuntimeError("Could not get connection from pool")

        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    @contextmanager
    def _dict_cursor(self):
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                yield cur
            conn.commit()

    def execute(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Execute query, return list of row dicts. Empty list if no results."""
        with self._dict_cursor() as cur:
            cur.execute(query, _adapt(params))
            if not cur.description:
                return []
            return [dict(row) for row in cur.fetchall()]

    def execute_single(self, query: str, params: Params = None) -> Dict[str, Any] | None:
        """Execute query, return first row or None."""
        results = self.execute(query, params)
        return results[0] if results else None

    def execute_scalar(self, query: str, params: Params = None) -> Any:
        """Execute query, return first value of first row or None."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, _adapt(params))
                result = cur.fetchone()
            conn.commit()
            return result[0] if result else None

    def execute_returning(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """Execute INSERT/UPDATE/DELETE with RETURNING, return affected rows."""
        with self._dict_cursor() as cur:
            cur.execute(query, _adapt(params))
            return [dict(row) for row in cur.fetchall()]

    def execute_many(self, query: str, params_seq: Iterable[Sequence[Any]]) -> int:
        """
        Run one statement for each parameter tuple, all in a single transaction.

        Returns the number of parameter tuples sent. Nothing is committed if
        any of them fails.
        """
        batch = [_adapt(tuple(params)) for params in params_seq]
        if not batch:
            return 0
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                psycopg2.extras.execute_batch(cur, query, batch)
            conn.commit()
        return len(batch)

    def close(self) -> None:
        """Close this URL's connection pool."""
        with self._pools_lock:
            pool = self._connection_pools.pop(self._database_url, None)
            if pool is not None:
                pool.closeall()

    @classmethod
    def close_all_pools(cls) -> None:
        """Close all connection pools."""
        with cls._pools_lock:
            for pool in cls._connection_pools.values():
                pool.closeall()
            cls._connection_pools.clear()
