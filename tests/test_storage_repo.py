"""Tests for StorageRepository against a mocked psycopg2 connection."""

from unittest.mock import MagicMock, patch

import pytest

from repositories.storage_repo import StorageRepository


@pytest.fixture
def conn():
    connection = MagicMock()
    cursor = connection.cursor.return_value.__enter__.return_value
    cursor.fetchone.return_value = None
    cursor.rowcount = 0
    return connection


@pytest.fixture
def cursor(conn):
    return conn.cursor.return_value.__enter__.return_value


@pytest.fixture(autouse=True)
def pool(conn):
    with patch("repositories.storage_repo.get_connection", return_value=conn), \
            patch("repositories.storage_repo.release_connection") as release:
        yield release


class TestStorageRepository:
    """Tests for get/set/remove."""

    def test_get_item_found(self, cursor, pool, conn):
        cursor.fetchone.return_value = ('[{"id": 1}]',)

        assert StorageRepository().get_item(1, "expenses") == '[{"id": 1}]'
        sql, params = cursor.execute.call_args[0]
        assert "FROM user_storage" in sql
        assert params == (1, "expenses")
        pool.assert_called_once_with(conn)

    def test_get_item_missing(self):
        assert StorageRepository().get_item(1, "expenses") is None

    def test_set_item_upserts_and_commits(self, cursor, conn, pool):
        StorageRepository().set_item(1, "showDates", "true")

        sql, params = cursor.execute.call_args[0]
        assert "ON CONFLICT (user_id, key)" in sql
        assert params == (1, "showDates", "true")
        conn.commit.assert_called_once()
        pool.assert_called_once_with(conn)

    def test_set_item_rolls_back_on_error(self, cursor, conn, pool):
        cursor.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            StorageRepository().set_item(1, "expenses", "[]")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool.assert_called_once_with(conn)
