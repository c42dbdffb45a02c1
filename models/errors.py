"""
models/errors.py
----------------
Domain exceptions raised by the cost model and the expense store.
All of them are recoverable: the service layer turns them into replies.
"""


class TrackerError(ValueError):
    """Base class for rejected user input."""


class InvalidDate(TrackerError):
    """A payment date that is malformed or not a real calendar date."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date: {value!r} (expected YYYY-MM-DD or DD/MM/YYYY)")


class InvalidAmount(TrackerError):
    """An amount that is negative, NaN, infinite or not a number at all."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid amount: {value!r} (expected a number >= 0)")


class EntryNotFound(TrackerError):
    """No entry with the given identifier in the user's collection."""

    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(f"Entry #{entry_id} does not exist")
