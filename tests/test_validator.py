"""
Tests for input validation.

Every add goes through EntryValidator before anything is written.
"""

import pytest

from splitledger.validation import EntryValidationError, EntryValidator


@pytest.fixture
def validator():
    return EntryValidator()


class TestValidateEntry:

    def test_valid_entry(self, validator):
        result = validator.validate_entry("12.50", "coffee beans")
        assert result.is_valid
        assert result.issues == []

    def test_all_problems_reported_together(self, validator):
        result = validator.validate_entry("abc", "  ")
        fields = sorted(issue.field for issue in result.issues)
        assert fields == ["amount", "description"]
        assert result.error_count == 2

    @pytest.mark.parametrize("amount_text, issue_type", [
        ("", "invalid_format"),
        ("twelve", "invalid_format"),
        ("1.234", "invalid_format"),
        ("0", "not_positive"),
        ("-3.00", "not_positive"),
    ])
    def test_bad_amounts(self, validator, amount_text, issue_type):
        result = validator.validate_entry(amount_text, "something")
        assert result.has_errors
        assert result.issues[0].field == "amount"
        assert result.issues[0].issue_type == issue_type

    def test_build_entry(self, validator):
        entry = validator.build_entry("3.5", " tea ")
        assert entry.amount == 350
        assert entry.description == "tea"

    def test_build_entry_raises_with_issues(self, validator):
        with pytest.raises(EntryValidationError) as exc:
            validator.build_entry("0", "tea")
        assert [issue.issue_type for issue in exc.value.issues] == ["not_positive"]


class TestValidateExpense:

    def test_valid_expense(self, validator):
        result = validator.validate_expense("alice", "dinner", "60", "alice bob")
        assert result.is_valid
        assert result.warnings == []

    def test_missing_payees(self, validator):
        result = validator.validate_expense("alice", "dinner", "60", "   ")
        assert result.has_errors
        assert result.issues[0].field == "payees"
        assert result.issues[0].issue_type == "missing"

    def test_missing_payer(self, validator):
        result = validator.validate_expense("", "dinner", "60", "bob")
        assert result.issues[0].field == "payer"
        assert result.issues[0].issue_type == "missing"

    def test_payer_with_space_rejected(self, validator):
        result = validator.validate_expense("alice smith", "dinner", "60", "bob")
        assert result.has_errors
        assert result.issues[0].issue_type == "invalid_format"
        assert result.issues[0].suggested_fix is not None

    def test_duplicate_payees_are_a_warning(self, validator):
        result = validator.validate_expense("alice", "dinner", "60", "bob alice bob")
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "'bob'" in result.warnings[0].message

    def test_build_expense_collapses_duplicates(self, validator):
        event, result = validator.build_expense("alice", "dinner", "60", "bob alice bob")
        assert event.payees == ("bob", "alice")
        assert event.amount == 6000
        assert len(result.warnings) == 1

    def test_build_expense_only_errors_on_exception(self, validator):
        with pytest.raises(EntryValidationError) as exc:
            validator.build_expense("alice", "", "x", "bob bob")
        assert all(issue.severity == "error" for issue in exc.value.issues)
        assert sorted(issue.field for issue in exc.value.issues) == ["amount", "description"]
        assert "Invalid input" in str(exc.value)
