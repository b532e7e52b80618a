"""
Storage Services Package

Provides abstract interfaces and concrete implementations for the ledgers.
The CLI uses the CSV files; tests use the in-memory stores.
"""

from splitledger.services.storage.interface import (
    CorruptRecordError,
    EntryStorageInterface,
    ExpenseStorageInterface,
    StorageError,
    StoreIOError,
)
from splitledger.services.storage.csv_files import (
    CsvEntryStorage,
    CsvExpenseStorage,
    CsvRecordFile,
)
from splitledger.services.storage.memory import (
    InMemoryEntryStorage,
    InMemoryExpenseStorage,
)

__all__ = [
    # Interfaces
    "EntryStorageInterface",
    "ExpenseStorageInterface",
    # Exceptions
    "CorruptRecordError",
    "StorageError",
    "StoreIOError",
    # CSV implementation
    "CsvEntryStorage",
    "CsvExpenseStorage",
    "CsvRecordFile",
    # In-memory implementation
    "InMemoryEntryStorage",
    "InMemoryExpenseStorage",
]
