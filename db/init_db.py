"""
db/init_db.py
-------------
Creates the key-value storage table if it does not exist yet.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Per-user key-value storage, the server-side stand-in for browser localStorage.
-- Values are JSON text: the entry array under 'expenses', a boolean under 'showDates'.
CREATE TABLE IF NOT EXISTS user_storage (
    user_id         BIGINT NOT NULL,
    key             VARCHAR(100) NOT NULL,
    value           TEXT NOT NULL,
    updated_at      TIMESTAMPTZ DEFAULT NOW(),
    PRIMARY KEY (user_id, key)
);
"""


def create_tables() -> None:
    """
    Execute the schema SQL.
    Safe to call on every startup (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema is up to date.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
