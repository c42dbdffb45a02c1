"""
repositories/storage_repo.py
----------------------------
Data access layer for the `user_storage` key-value table.
Mirrors the browser localStorage API (get/set a string per key),
scoped to one Telegram user.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)


class StorageRepository:
    """Repository for string values stored per (user, key)."""

    def get_item(self, user_id: int, key: str) -> Optional[str]:
        """
        Read a stored value.

        Returns:
            The raw string, or None if nothing is stored under the key.
        """
        sql = "SELECT value FROM user_storage WHERE user_id = %s AND key = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id, key))
                row = cur.fetchone()
                return row[0] if row else None
        finally:
            release_connection(conn)

    def set_item(self, user_id: int, key: str, value: str) -> None:
        """Insert or overwrite the value stored under a key."""
        sql = """
            INSERT INTO user_storage (user_id, key, value)
            VALUES (%s, %s, %s)
            ON CONFLICT (user_id, key)
            DO UPDATE SET value = EXCLUDED.value, updated_at = NOW();
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (user_id, key, value))
            conn.commit()
            logger.debug(f"Stored '{key}' for user {user_id} ({len(value)} chars)")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to store '{key}' for user {user_id}: {e}")
            raise
        finally:
            release_connection(conn)
