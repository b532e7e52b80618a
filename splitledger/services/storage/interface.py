"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the CSV files the CLI has always used
2. Use in-memory storage for testing
3. Keep settlement and validation decoupled from file handling

The interface is intentionally tiny. The ledger is append-only:
records are appended and read back in full, never edited or deleted.
"""

from abc import ABC, abstractmethod

from splitledger.models.ledger import Entry, ExpenseEvent


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreIOError(StorageError):
    """The underlying file operation failed (permissions, missing directory, disk)."""
    pass


class CorruptRecordError(StorageError):
    """
    A stored record could not be parsed.

    Never raised out of a read: the record is skipped and the error is
    kept on the storage's `skipped` list so the caller can report it.
    """

    def __init__(self, line_number: int, raw: str, reason: str):
        super().__init__(f"Corrupt record at line {line_number}: {reason}")
        self.line_number = line_number
        self.raw = raw
        self.reason = reason


class EntryStorageInterface(ABC):
    """
    Abstract interface for the simple entries ledger.

    Implementations must return entries in append order.
    """

    def __init__(self):
        self.skipped: list[CorruptRecordError] = []

    @abstractmethod
    def append_entry(self, entry: Entry) -> None:
        """
        Append an entry to the ledger.

        Raises:
            StoreIOError: If the write fails
        """
        pass

    @abstractmethod
    def read_entries(self) -> list[Entry]:
        """
        Read every entry in append order.

        Corrupt records are skipped and collected in `skipped`.

        Raises:
            StoreIOError: If the read fails
        """
        pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the shared expense ledger.

    Implementations must return events in append order.
    """

    def __init__(self):
        self.skipped: list[CorruptRecordError] = []

    @abstractmethod
    def append_event(self, event: ExpenseEvent) -> None:
        """
        Append a shared expense to the ledger.

        Raises:
            StoreIOError: If the write fails
        """
        pass

    def append_events(self, events: list[ExpenseEvent]) -> None:
        """Append several events in order."""
        for event in events:
            self.append_event(event)

    @abstractmethod
    def read_events(self) -> list[ExpenseEvent]:
        """
        Read every shared expense in append order.

        Corrupt records are skipped and collected in `skipped`.

        Raises:
            StoreIOError: If the read fails
        """
        pass
