"""PostgreSQL-backed key-value store used by the local cache."""
import psycopg2
from psycopg2 import pool
from typing import Optional, Iterable
import logging

logger = logging.getLogger(__name__)


class Database:
    """
    Key-value store on PostgreSQL with connection pooling.

    The pool is opened and the schema created on first use, so an
    unreachable server only fails the individual get/set/remove calls.
    """

    def __init__(self, connection_string: str, min_conn: int = 1, max_conn: int = 5):
        """
        Initialize database settings.

        Args:
            connection_string: PostgreSQL connection string
            min_conn: Minimum connections in pool
            max_conn: Maximum connections in pool
        """
        self.connection_string = connection_string
        self.min_conn = min_conn
        self.max_conn = max_conn
        self.connection_pool = None

    def _get_pool(self):
        """Open the pool and create the schema if not done yet."""
        if self.connection_pool is None:
            connection_pool = psycopg2.pool.SimpleConnectionPool(
                self.min_conn,
                self.max_conn,
                self.connection_string
            )
            logger.info("Database connection pool created successfully")
            self.connection_pool = connection_pool
            try:
                self.init_schema()
            except psycopg2.Error:
                self.close()
                raise
        return self.connection_pool

    def init_schema(self):
        """Create the key-value table if it doesn't exist."""
        connection_pool = self._get_pool()
        conn = connection_pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key VARCHAR(255) PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                conn.commit()
                logger.info("Database schema initialized successfully")
        except Exception:
            conn.rollback()
            raise
        finally:
            connection_pool.putconn(conn)

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key, or None."""
        connection_pool = self._get_pool()
        conn = connection_pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                row = cur.fetchone()
                return row[0] if row else None
        except Exception:
            conn.rollback()
            raise
        finally:
            connection_pool.putconn(conn)

    def set(self, key: str, value: str):
        """Insert or replace the value stored under a key."""
        connection_pool = self._get_pool()
        conn = connection_pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (%s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (key) DO UPDATE SET
                        value = EXCLUDED.value,
                        updated_at = CURRENT_TIMESTAMP
                """, (key, value))
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            connection_pool.putconn(conn)

    def remove(self, keys: Iterable[str]):
        """Delete several keys at once."""
        connection_pool = self._get_pool()
        conn = connection_pool.getconn()
        try:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM kv_store WHERE key = ANY(%s)", (list(keys),))
                deleted = cur.rowcount
                conn.commit()
                logger.info(f"Removed {deleted} keys")
        except Exception:
            conn.rollback()
            raise
        finally:
            connection_pool.putconn(conn)

    def close(self):
        """Close all connections in the pool."""
        if self.connection_pool:
            self.connection_pool.closeall()
            self.connection_pool = None
            logger.info("Database connection pool closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
