"""
Audit Models for splitledger

Every significant action on the ledger is logged for audit purposes.
This provides:
1. Traceability of what was added and when
2. Visibility into records skipped as corrupt
3. Debugging information when a settlement fails

DESIGN DECISION: Audit events are emitted through structured logging only.
The ledger files stay plain CSV and carry nothing but records.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Recording
    ENTRY_ADDED = "entry_added"
    EXPENSE_ADDED = "expense_added"
    VALIDATION_FAILED = "validation_failed"

    # Reading
    RECORD_SKIPPED = "record_skipped"

    # Settlement
    BALANCES_COMPUTED = "balances_computed"
    SETTLEMENT_COMPUTED = "settlement_computed"
    SETTLEMENT_RECORDED = "settlement_recorded"

    # Failures
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    ledger: Optional[str] = Field(
        default=None,
        description="Which ledger the event concerns ('entries' or 'shared')"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "ledger": self.ledger,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(payer, payees, amount)
        event = AuditEventBuilder.record_skipped("shared", 3, "bad amount")
    """

    @staticmethod
    def entry_added(amount: str, description: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            ledger="entries",
            description=f"Entry added: {amount} for {description}",
            details={
                "amount": amount,
                "description": description,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        payer: str,
        payees: list[str],
        amount: str,
        description: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            ledger="shared",
            description=f"Expense added: {payer} paid {amount} for {description}",
            details={
                "payer": payer,
                "payees": payees,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(ledger: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            ledger=ledger,
            description=f"Input validation failed with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def record_skipped(ledger: str, line_number: int, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            ledger=ledger,
            description=f"Skipped corrupt record at line {line_number}",
            details={
                "line_number": line_number,
                "reason": reason,
            },
        )

    @staticmethod
    def balances_computed(event_count: int, participant_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCES_COMPUTED,
            severity=AuditSeverity.DEBUG,
            ledger="shared",
            description=f"Balances computed for {participant_count} participants",
            details={
                "event_count": event_count,
                "participant_count": participant_count,
            },
        )

    @staticmethod
    def settlement_computed(transfer_count: int, total_moved: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_COMPUTED,
            ledger="shared",
            description=f"Settlement computed: {transfer_count} transfers",
            details={
                "transfer_count": transfer_count,
                "total_moved": total_moved,
            },
        )

    @staticmethod
    def settlement_recorded(record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_RECORDED,
            ledger="shared",
            description=f"Settlement recorded as {record_count} closing records",
            details={
                "record_count": record_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def storage_error(ledger: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            ledger=ledger,
            description=f"Storage error on {ledger} ledger",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
