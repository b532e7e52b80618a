"""
Main Orchestrator for splitledger

This module ties together storage, validation, the settlement engine
and auditing, and defines the end-to-end flows for:
1. Simple entries (add → list → sum)
2. Shared expenses (add → list → balances → settle)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written unless validation passed
- Balances are always derived from the full ledger, never cached
- Every corrupt record skipped on read is reported
- Every step is audited

The CLI only formats what these flows return.
"""

from typing import Optional

from splitledger.audit import AuditLogger
from splitledger.models.ledger import (
    Entry,
    ExpenseEvent,
    SettlementReport,
    ValidationResult,
)
from splitledger.models.money import format_minor_units
from splitledger.services.storage import (
    CorruptRecordError,
    EntryStorageInterface,
    ExpenseStorageInterface,
    StorageError,
)
from splitledger.settlement import (
    UnbalancedError,
    compute_balances,
    settle,
    settlement_events,
)
from splitledger.validation import EntryValidationError, EntryValidator


class EntryLedgerFlow:
    """
    Orchestrates the simple entries ledger.

    Flow:
    1. Validate → reject bad input before any write
    2. Append → one record per add
    3. Read → list or sum every entry
    """

    LEDGER = "entries"

    def __init__(
        self,
        storage: EntryStorageInterface,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or EntryValidator()
        self._audit = audit_logger or AuditLogger()

    @property
    def skipped(self) -> list[CorruptRecordError]:
        """Corrupt records skipped by the most recent read."""
        return self._storage.skipped

    def add_entry(self, amount_text: str, description: str) -> Entry:
        """
        Validate and append a simple entry.

        Raises:
            EntryValidationError: Input was invalid; nothing was written
            StorageError: The append failed
        """
        try:
            entry = self._validator.build_entry(amount_text, description)
        except EntryValidationError as e:
            self._audit.log_validation_failed(
                self.LEDGER, [issue.model_dump() for issue in e.issues]
            )
            raise

        try:
            self._storage.append_entry(entry)
        except StorageError as e:
            self._audit.log_storage_error(self.LEDGER, str(e))
            raise

        self._audit.log_entry_added(entry.amount_display, entry.description)
        return entry

    def list_entries(self) -> list[Entry]:
        """Every entry in append order."""
        try:
            entries = self._storage.read_entries()
        except StorageError as e:
            self._audit.log_storage_error(self.LEDGER, str(e))
            raise
        _report_skipped(self._audit, self.LEDGER, self._storage.skipped)
        return entries

    def total(self) -> int:
        """Exact sum of every entry, in minor units."""
        return sum(entry.amount for entry in self.list_entries())


class SharedExpenseFlow:
    """
    Orchestrates the shared expense ledger.

    Flow:
    1. Suggest → participants and descriptions from history (for completion)
    2. Validate → reject bad input before any write
    3. Append → one event per shared expense
    4. Settle → balances and transfers from the full ledger,
       optionally appended as closing records
    """

    LEDGER = "shared"

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or EntryValidator()
        self._audit = audit_logger or AuditLogger()

    @property
    def skipped(self) -> list[CorruptRecordError]:
        """Corrupt records skipped by the most recent read."""
        return self._storage.skipped

    def list_expenses(self) -> list[ExpenseEvent]:
        """Every shared expense in append order."""
        try:
            events = self._storage.read_events()
        except StorageError as e:
            self._audit.log_storage_error(self.LEDGER, str(e))
            raise
        _report_skipped(self._audit, self.LEDGER, self._storage.skipped)
        return events

    def known_participants(self, events: Optional[list[ExpenseEvent]] = None) -> list[str]:
        """Everyone seen so far: each record's payees, then its payer."""
        if events is None:
            events = self.list_expenses()
        people: dict[str, None] = {}
        for event in events:
            for name in (*event.payees, event.payer):
                people.setdefault(name, None)
        return list(people)

    def known_descriptions(self, events: Optional[list[ExpenseEvent]] = None) -> list[str]:
        """Every description seen so far, oldest first."""
        if events is None:
            events = self.list_expenses()
        return list(dict.fromkeys(event.description for event in events))

    def add_expense(
        self,
        payer: str,
        description: str,
        amount_text: str,
        payees_text: str,
    ) -> tuple[ExpenseEvent, ValidationResult]:
        """
        Validate and append a shared expense.

        Returns the stored event and the validation result (for warnings).

        Raises:
            EntryValidationError: Input was invalid; nothing was written
            StorageError: The append failed
        """
        try:
            event, result = self._validator.build_expense(
                payer, description, amount_text, payees_text
            )
        except EntryValidationError as e:
            self._audit.log_validation_failed(
                self.LEDGER, [issue.model_dump() for issue in e.issues]
            )
            raise

        try:
            self._storage.append_event(event)
        except StorageError as e:
            self._audit.log_storage_error(self.LEDGER, str(e))
            raise

        self._audit.log_expense_added(
            payer=event.payer,
            payees=list(event.payees),
            amount=event.amount_display,
            description=event.description,
        )
        return event, result

    def balances(self) -> dict[str, int]:
        """Net balance per participant over the whole ledger."""
        events = self.list_expenses()
        balances = compute_balances(events)
        self._audit.log_balances_computed(len(events), len(balances))
        return balances

    def settle(self, record: bool = False) -> SettlementReport:
        """
        Compute the transfers that settle every balance.

        Args:
            record: Append the transfers as closing records so later
                    balances start from zero

        Raises:
            UnbalancedError: Balances did not sum to zero
            StorageError: Reading or recording failed
        """
        balances = self.balances()
        try:
            transfers = settle(balances)
        except UnbalancedError as e:
            self._audit.log_error(
                type(e).__name__, str(e), {"total": e.total, "balances": balances}
            )
            raise
        self._audit.log_settlement_computed(
            len(transfers),
            format_minor_units(sum(t.amount for t in transfers)),
        )

        recorded = False
        if record and transfers:
            try:
                self._storage.append_events(settlement_events(transfers))
            except StorageError as e:
                self._audit.log_storage_error(self.LEDGER, str(e))
                raise
            self._audit.log_settlement_recorded(len(transfers))
            recorded = True

        return SettlementReport(
            balances=balances,
            transfers=transfers,
            recorded=recorded,
        )


def _report_skipped(
    audit: AuditLogger,
    ledger: str,
    skipped: list[CorruptRecordError],
) -> None:
    for error in skipped:
        audit.log_record_skipped(ledger, error.line_number, error.reason)
