"""
Data Models Package

This package contains all Pydantic models used in splitledger.
All data flowing through the system must conform to these schemas.
"""

from splitledger.models.ledger import (
    Entry,
    ExpenseEvent,
    SettlementReport,
    Transfer,
    ValidationIssue,
    ValidationResult,
    check_participant_id,
)
from splitledger.models.money import (
    AmountError,
    amount_text_to_minor_units,
    format_minor_units,
    parse_amount,
    to_minor_units,
)
from splitledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Entry",
    "ExpenseEvent",
    "SettlementReport",
    "Transfer",
    "ValidationIssue",
    "ValidationResult",
    "check_participant_id",
    # Money
    "AmountError",
    "amount_text_to_minor_units",
    "format_minor_units",
    "parse_amount",
    "to_minor_units",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
