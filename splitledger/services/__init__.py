"""Services package."""

from splitledger.services.storage import (
    CorruptRecordError,
    CsvEntryStorage,
    CsvExpenseStorage,
    EntryStorageInterface,
    ExpenseStorageInterface,
    InMemoryEntryStorage,
    InMemoryExpenseStorage,
    StorageError,
    StoreIOError,
)

__all__ = [
    "CorruptRecordError",
    "CsvEntryStorage",
    "CsvExpenseStorage",
    "EntryStorageInterface",
    "ExpenseStorageInterface",
    "InMemoryEntryStorage",
    "InMemoryExpenseStorage",
    "StorageError",
    "StoreIOError",
]
