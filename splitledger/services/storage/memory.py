"""
In-Memory Storage Implementation

Used by tests and anywhere a throwaway ledger is needed.
Behaves like the CSV storage minus the file: append order is preserved
and nothing is ever corrupt.
"""

from splitledger.models.ledger import Entry, ExpenseEvent
from splitledger.services.storage.interface import (
    EntryStorageInterface,
    ExpenseStorageInterface,
)


class InMemoryEntryStorage(EntryStorageInterface):
    """Simple entries held in a list."""

    def __init__(self, entries: list[Entry] = None):
        super().__init__()
        self._entries = list(entries or [])

    def append_entry(self, entry: Entry) -> None:
        self._entries.append(entry)

    def read_entries(self) -> list[Entry]:
        return list(self._entries)


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Shared expenses held in a list."""

    def __init__(self, events: list[ExpenseEvent] = None):
        super().__init__()
        self._events = list(events or [])

    def append_event(self, event: ExpenseEvent) -> None:
        self._events.append(event)

    def read_events(self) -> list[ExpenseEvent]:
        return list(self._events)
