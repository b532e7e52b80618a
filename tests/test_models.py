"""
Tests for splitledger

Test strategy:
1. Unit tests for individual components (models, money, engine, validator)
2. Integration tests for flows and storage (in-memory and tmp_path files)
3. CLI tests through click's CliRunner, never the user's real ledger
"""

import pytest
from decimal import Decimal

from splitledger.models.ledger import (
    Entry,
    ExpenseEvent,
    SettlementReport,
    Transfer,
    ValidationIssue,
    ValidationResult,
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


class TestMoney:
    """Tests for exact minor-unit conversion."""

    def test_parse_whole_and_fractional_amounts(self):
        """Test decimal text converts to minor units exactly."""
        assert amount_text_to_minor_units("20") == 2000
        assert amount_text_to_minor_units("20.0") == 2000
        assert amount_text_to_minor_units("12.5") == 1250
        assert amount_text_to_minor_units(" 0.01 ") == 1

    def test_too_many_decimal_places_rejected(self):
        """Test that sub-minor-unit precision is rejected, not rounded."""
        with pytest.raises(AmountError, match="more than 2 decimal places"):
            to_minor_units(Decimal("1.005"))

    def test_trailing_zero_precision_accepted(self):
        """Test that extra zeros are not extra precision."""
        assert to_minor_units(Decimal("3.1000")) == 310

    @pytest.mark.parametrize("text", ["9E+999999", "1E+16", "123456789012345678"])
    def test_out_of_range_rejected(self, text):
        """Test that amounts too large for minor units are rejected, not crashed on."""
        with pytest.raises(AmountError, match="out of range"):
            amount_text_to_minor_units(text)

    def test_largest_amount_accepted(self):
        """Test the upper bound itself still converts."""
        assert amount_text_to_minor_units("9999999999999999.99") == 999999999999999999

    def test_long_fraction_not_rounded_by_context(self):
        """Test that digits beyond the decimal context precision still count."""
        with pytest.raises(AmountError, match="decimal places"):
            amount_text_to_minor_units("1.0000000000000000000000000001")

    @pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity", "1,5"])
    def test_invalid_text_rejected(self, text):
        """Test that non-numeric and non-finite text is rejected."""
        with pytest.raises(AmountError):
            parse_amount(text)

    @pytest.mark.parametrize("amount, expected", [
        (0, "0.00"),
        (5, "0.05"),
        (1050, "10.50"),
        (-40, "-0.40"),
        (-123456, "-1234.56"),
    ])
    def test_format_minor_units(self, amount, expected):
        """Test display formatting keeps two places and the sign."""
        assert format_minor_units(amount) == expected


class TestLedgerModels:
    """Tests for ledger record models."""

    def test_entry_creation(self):
        """Test Entry model creation."""
        entry = Entry(amount=1250, description="  coffee beans ")
        assert entry.description == "coffee beans"
        assert entry.amount_display == "12.50"

    def test_entry_rejects_non_positive_amount(self):
        """Test that zero and negative entries are rejected."""
        with pytest.raises(ValueError):
            Entry(amount=0, description="nothing")
        with pytest.raises(ValueError):
            Entry(amount=-5, description="refund")

    def test_entry_is_immutable(self):
        """Test that recorded entries cannot be edited."""
        entry = Entry(amount=100, description="tea")
        with pytest.raises(ValueError):
            entry.amount = 200

    def test_expense_event_creation(self):
        """Test ExpenseEvent model creation."""
        event = ExpenseEvent(
            payer="alice",
            payees=["alice", "bob"],
            description="dinner",
            amount=2000,
        )
        assert event.payees == ("alice", "bob")
        assert event.amount_display == "20.00"

    def test_expense_event_collapses_duplicate_payees(self):
        """Test that payees behave as a set, keeping first-seen order."""
        event = ExpenseEvent(
            payer="alice",
            payees=("bob", "alice", "bob"),
            description="taxi",
            amount=900,
        )
        assert event.payees == ("bob", "alice")

    def test_expense_event_requires_payees(self):
        """Test that an empty payee list is rejected."""
        with pytest.raises(ValueError):
            ExpenseEvent(payer="alice", payees=(), description="x", amount=100)

    def test_expense_event_rejects_whitespace_in_identifier(self):
        """Test that a payer cannot silently become two people."""
        with pytest.raises(ValueError, match="whitespace"):
            ExpenseEvent(payer="alice smith", payees=("bob",), description="x", amount=100)

    def test_expense_event_rejects_empty_description(self):
        """Test that an empty description is rejected."""
        with pytest.raises(ValueError):
            ExpenseEvent(payer="alice", payees=("bob",), description="  ", amount=100)

    def test_transfer_requires_distinct_parties(self):
        """Test that nobody pays themselves."""
        with pytest.raises(ValueError, match="must differ"):
            Transfer(sender="bob", recipient="bob", amount=100)

    def test_settlement_report_is_settled(self):
        """Test is_settled reflects whether transfers remain."""
        assert SettlementReport(balances={"alice": 0}).is_settled is True
        report = SettlementReport(
            balances={"alice": 100, "bob": -100},
            transfers=[Transfer(sender="bob", recipient="alice", amount=100)],
        )
        assert report.is_settled is False


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Amount is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            issues=[
                ValidationIssue(
                    field="payees",
                    issue_type="duplicate",
                    message="Payee 'bob' listed more than once",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert len(result.warnings) == 1

    def test_validation_issue_severity_pattern(self):
        """Test that only error and warning severities exist."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="info")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            description="Entry added",
        )
        assert event.event_type == AuditEventType.ENTRY_ADDED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_added(
            payer="alice",
            payees=["alice", "bob"],
            amount="20.00",
            description="dinner",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["ledger"] == "shared"
        assert log_dict["details"]["payees"] == ["alice", "bob"]
        assert log_dict["is_user_action"] is True

    def test_audit_event_builder_record_skipped(self):
        """Test AuditEventBuilder.record_skipped is a warning."""
        event = AuditEventBuilder.record_skipped("shared", 3, "amount: bad")
        assert event.event_type == AuditEventType.RECORD_SKIPPED
        assert event.severity == AuditSeverity.WARNING
        assert event.details["line_number"] == 3

    def test_audit_event_builder_storage_error(self):
        """Test AuditEventBuilder.storage_error carries the message."""
        event = AuditEventBuilder.storage_error("entries", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
