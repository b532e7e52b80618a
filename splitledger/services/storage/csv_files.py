"""
CSV File Storage Implementation

DESIGN DECISION: The ledgers are plain delimited-text files because:
1. Users can read and back them up with any tool
2. No database setup required
3. Appending one line is the whole write path

Format (no header row, one record per line, fields in fixed order):
- entries.txt:      amount,description
- new_entries.txt:  payer,payees,description,amount
  (payees are space-separated inside their field)

TRADEOFFS:
- No locking; a single user on a single machine is assumed
- Every read parses the whole file (personal-use scale)
"""

import csv
import io
import re
from pathlib import Path
from typing import Iterator, Union

from pydantic import ValidationError

from splitledger.models.ledger import Entry, ExpenseEvent
from splitledger.models.money import (
    AmountError,
    amount_text_to_minor_units,
    format_minor_units,
)
from splitledger.services.storage.interface import (
    CorruptRecordError,
    EntryStorageInterface,
    ExpenseStorageInterface,
    StoreIOError,
)

ENTRY_COLUMNS = ["amount", "description"]
EXPENSE_COLUMNS = ["payer", "payees", "description", "amount"]

# Bytes that failed to decode come back as lone surrogates (surrogateescape)
_UNDECODABLE = re.compile("[\udc80-\udcff]")


def _printable(text: str) -> str:
    """Undo surrogateescape, replacing the bad bytes so the text can be shown."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class CsvRecordFile:
    """
    Low-level append-only CSV file.

    Handles directory creation and maps OS failures to StoreIOError.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def append_row(self, row: list[str]) -> None:
        """Append one record, creating the parent directory if needed."""
        self.append_rows([row])

    def append_rows(self, rows: list[list[str]]) -> None:
        """
        Append several records with a single write.

        The rows are serialized up front, so a failure while building
        them leaves the file untouched.
        """
        buffer = io.StringIO(newline="")
        csv.writer(buffer).writerows(rows)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", newline="", encoding="utf-8") as f:
                f.write(buffer.getvalue())
        except OSError as e:
            raise StoreIOError(f"Failed to append to {self.path}: {e}")

    def read_rows(self) -> Iterator[Union[tuple[int, list[str]], CorruptRecordError]]:
        """
        Yield (line_number, fields) per record, in file order.

        Lines the CSV parser rejects, or that are not valid UTF-8, are
        yielded as CorruptRecordError instead of aborting the read.
        A missing file yields nothing.
        """
        try:
            f = open(self.path, newline="", encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            return
        except OSError as e:
            raise StoreIOError(f"Failed to read {self.path}: {e}")

        with f:
            reader = csv.reader(f)
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    yield CorruptRecordError(reader.line_num, "", str(e))
                    continue
                except OSError as e:
                    raise StoreIOError(f"Failed to read {self.path}: {e}")

                if not row or not any(field.strip() for field in row):
                    continue  # Skip blank lines
                if any(_UNDECODABLE.search(field) for field in row):
                    yield CorruptRecordError(
                        reader.line_num,
                        _printable(",".join(row)),
                        "not valid UTF-8 text",
                    )
                    continue
                yield reader.line_num, row


def _collect(
    records: CsvRecordFile,
    parse,
    expected_columns: list[str],
) -> tuple[list, list[CorruptRecordError]]:
    """Parse every row, splitting good records from corrupt ones."""
    parsed = []
    skipped = []

    for item in records.read_rows():
        if isinstance(item, CorruptRecordError):
            skipped.append(item)
            continue

        line_number, row = item
        raw = ",".join(row)
        if len(row) != len(expected_columns):
            skipped.append(CorruptRecordError(
                line_number,
                raw,
                f"expected {len(expected_columns)} fields, got {len(row)}",
            ))
            continue

        try:
            parsed.append(parse(row))
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            skipped.append(CorruptRecordError(line_number, raw, f"{field}: {error['msg']}"))
        except AmountError as e:
            skipped.append(CorruptRecordError(line_number, raw, str(e)))

    return parsed, skipped


class CsvEntryStorage(EntryStorageInterface):
    """CSV implementation of the simple entries ledger."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self._file = CsvRecordFile(path)

    @property
    def path(self) -> Path:
        return self._file.path

    def _entry_to_row(self, entry: Entry) -> list[str]:
        return [format_minor_units(entry.amount), entry.description]

    def _row_to_entry(self, row: list[str]) -> Entry:
        return Entry(
            amount=amount_text_to_minor_units(row[0]),
            description=row[1],
        )

    def append_entry(self, entry: Entry) -> None:
        self._file.append_row(self._entry_to_row(entry))

    def read_entries(self) -> list[Entry]:
        entries, self.skipped = _collect(
            self._file, self._row_to_entry, ENTRY_COLUMNS
        )
        return entries


class CsvExpenseStorage(ExpenseStorageInterface):
    """
    CSV implementation of the shared expense ledger.

    Payees are joined with single spaces into one field, which is why
    participant identifiers may not contain whitespace.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self._file = CsvRecordFile(path)

    @property
    def path(self) -> Path:
        return self._file.path

    def _event_to_row(self, event: ExpenseEvent) -> list[str]:
        return [
            event.payer,
            " ".join(event.payees),
            event.description,
            format_minor_units(event.amount),
        ]

    def _row_to_event(self, row: list[str]) -> ExpenseEvent:
        return ExpenseEvent(
            payer=row[0],
            payees=tuple(row[1].split()),
            description=row[2],
            amount=amount_text_to_minor_units(row[3]),
        )

    def append_event(self, event: ExpenseEvent) -> None:
        self._file.append_row(self._event_to_row(event))

    def append_events(self, events: list[ExpenseEvent]) -> None:
        """Append several events through one open file handle."""
        self._file.append_rows([self._event_to_row(event) for event in events])

    def read_events(self) -> list[ExpenseEvent]:
        events, self.skipped = _collect(
            self._file, self._row_to_event, EXPENSE_COLUMNS
        )
        return events
