"""Shared fixtures for the test suite."""

from datetime import date

import pytest

from models.cost import Frequency
from models.entry import Entry
from repositories.entry_repo import EntryRepository
from security import rate_limiter


class FakeStorage:
    """In-memory stand-in for StorageRepository."""

    def __init__(self):
        self.items: dict[tuple[int, str], str] = {}

    def get_item(self, user_id, key):
        return self.items.get((user_id, key))

    def set_item(self, user_id, key, value):
        self.items[(user_id, key)] = value


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def repo(storage):
    return EntryRepository(storage=storage)


@pytest.fixture
def make_entry():
    """Factory for entries with sensible defaults."""
    def _make(id=1, name="Netflix", account="Visa", amount=15.0,
              frequency=Frequency.MONTHLY, last_payment=date(2024, 5, 1)):
        return Entry(
            name=name,
            account=account,
            amount=amount,
            frequency=Frequency.parse(frequency),
            last_payment=last_payment,
            id=id,
        )
    return _make


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter._user_timestamps.clear()
    yield
    rate_limiter._user_timestamps.clear()
