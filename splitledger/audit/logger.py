"""
Audit Logger

DESIGN DECISION: Every significant action on the ledger is logged.
This provides:
1. Traceability of what was recorded
2. Visible warnings for corrupt records that were skipped
3. Debugging capability when a settlement fails

The audit logger:
- Writes structured events through structlog (stderr, never stdout,
  so command output stays clean)
- Logs at the severity carried by each event
"""

import logging
import sys
from typing import Optional

import structlog

from splitledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """
    Configure structlog on top of stdlib logging.

    Called once by the CLI at startup. Library code only ever asks
    structlog for a logger.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditLogger:
    """
    Central audit logging service.

    One instance is shared by the flows of a single CLI invocation.
    """

    def __init__(self, logger=None):
        self._logger = logger or structlog.get_logger("splitledger.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at its severity."""
        log_dict = event.to_log_dict()
        event_type = log_dict.pop("event_type")

        if event.severity == AuditSeverity.ERROR:
            self._logger.error(event_type, **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning(event_type, **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug(event_type, **log_dict)
        else:
            self._logger.info(event_type, **log_dict)

    def log_entry_added(self, amount: str, description: str) -> None:
        """Log a simple entry being recorded."""
        self.log(AuditEventBuilder.entry_added(amount=amount, description=description))

    def log_expense_added(
        self,
        payer: str,
        payees: list[str],
        amount: str,
        description: str,
    ) -> None:
        """Log a shared expense being recorded."""
        self.log(AuditEventBuilder.expense_added(
            payer=payer,
            payees=payees,
            amount=amount,
            description=description,
        ))

    def log_validation_failed(self, ledger: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(ledger=ledger, issues=issues))

    def log_record_skipped(self, ledger: str, line_number: int, reason: str) -> None:
        self.log(AuditEventBuilder.record_skipped(
            ledger=ledger,
            line_number=line_number,
            reason=reason,
        ))

    def log_balances_computed(self, event_count: int, participant_count: int) -> None:
        self.log(AuditEventBuilder.balances_computed(
            event_count=event_count,
            participant_count=participant_count,
        ))

    def log_settlement_computed(self, transfer_count: int, total_moved: str) -> None:
        self.log(AuditEventBuilder.settlement_computed(
            transfer_count=transfer_count,
            total_moved=total_moved,
        ))

    def log_settlement_recorded(self, record_count: int) -> None:
        self.log(AuditEventBuilder.settlement_recorded(record_count=record_count))

    def log_storage_error(self, ledger: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(ledger=ledger, error_message=error_message))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
