"""
Input Validation

DESIGN DECISION: Raw user input is validated BEFORE anything touches
the ledger. Every problem is collected, not just the first one, so the
user can fix everything in one go.

Checks:
- Amount present, numeric, positive, no finer than a minor unit
- Description present
- Payer present and a single identifier
- At least one payee; duplicate payees are collapsed with a warning

IMPORTANT: Validation NEVER silently fixes errors. Only warnings
(duplicate payees) are normalized; anything error-level is reported
and the store is not touched.
"""

from typing import Optional

from splitledger.models.ledger import (
    Entry,
    ExpenseEvent,
    ValidationIssue,
    ValidationResult,
)
from splitledger.models.money import AmountError, amount_text_to_minor_units


class EntryValidationError(Exception):
    """Input to an add command was invalid. Carries every error-level issue."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        messages = "; ".join(issue.message for issue in issues)
        super().__init__(f"Invalid input: {messages}")


class EntryValidator:
    """Validates raw add input for both ledgers."""

    def _check_amount(
        self,
        amount_text: Optional[str],
        issues: list[ValidationIssue],
    ) -> Optional[int]:
        """Parse the amount, recording any issue. Returns minor units or None."""
        try:
            amount = amount_text_to_minor_units(amount_text or "")
        except AmountError as e:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=str(e),
                severity="error",
                suggested_fix="Enter a number with at most two decimals, e.g. 12.50",
            ))
            return None

        if amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be greater than zero",
                severity="error",
            ))
            return None
        return amount

    def _check_description(
        self,
        description: Optional[str],
        issues: list[ValidationIssue],
    ) -> None:
        if not (description or "").strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
            ))

    def _check_payer(self, payer: Optional[str], issues: list[ValidationIssue]) -> None:
        payer = (payer or "").strip()
        if not payer:
            issues.append(ValidationIssue(
                field="payer",
                issue_type="missing",
                message="Payer is required",
                severity="error",
            ))
        elif any(ch.isspace() for ch in payer):
            issues.append(ValidationIssue(
                field="payer",
                issue_type="invalid_format",
                message=f"Payer must be a single name, got {payer!r}",
                severity="error",
                suggested_fix="Use one word per person, e.g. 'alice'",
            ))

    def _check_payees(
        self,
        payees_text: Optional[str],
        issues: list[ValidationIssue],
    ) -> list[str]:
        payees = (payees_text or "").split()
        if not payees:
            issues.append(ValidationIssue(
                field="payees",
                issue_type="missing",
                message="At least one payee is required",
                severity="error",
                suggested_fix="List names separated by spaces, e.g. 'alice bob'",
            ))
            return []

        unique = list(dict.fromkeys(payees))
        for name in sorted(set(p for p in payees if payees.count(p) > 1)):
            issues.append(ValidationIssue(
                field="payees",
                issue_type="duplicate",
                message=f"Payee {name!r} listed more than once; counted once",
                severity="warning",
            ))
        return unique

    def validate_entry(
        self,
        amount_text: Optional[str],
        description: Optional[str],
    ) -> ValidationResult:
        """Validate input for a simple entry."""
        issues: list[ValidationIssue] = []
        self._check_amount(amount_text, issues)
        self._check_description(description, issues)
        return ValidationResult(issues=issues)

    def validate_expense(
        self,
        payer: Optional[str],
        description: Optional[str],
        amount_text: Optional[str],
        payees_text: Optional[str],
    ) -> ValidationResult:
        """Validate input for a shared expense."""
        issues: list[ValidationIssue] = []
        self._check_payer(payer, issues)
        self._check_description(description, issues)
        self._check_amount(amount_text, issues)
        self._check_payees(payees_text, issues)
        return ValidationResult(issues=issues)

    def build_entry(self, amount_text: Optional[str], description: Optional[str]) -> Entry:
        """
        Validate and build a simple entry.

        Raises:
            EntryValidationError: If any error-level issue was found
        """
        result = self.validate_entry(amount_text, description)
        if result.has_errors:
            raise EntryValidationError(
                [issue for issue in result.issues if issue.severity == "error"]
            )
        return Entry(
            amount=amount_text_to_minor_units(amount_text),
            description=description,
        )

    def build_expense(
        self,
        payer: Optional[str],
        description: Optional[str],
        amount_text: Optional[str],
        payees_text: Optional[str],
    ) -> tuple[ExpenseEvent, ValidationResult]:
        """
        Validate and build a shared expense.

        Returns the event together with the validation result so callers
        can surface warnings.

        Raises:
            EntryValidationError: If any error-level issue was found
        """
        result = self.validate_expense(payer, description, amount_text, payees_text)
        if result.has_errors:
            raise EntryValidationError(
                [issue for issue in result.issues if issue.severity == "error"]
            )
        event = ExpenseEvent(
            payer=payer,
            payees=tuple(payees_text.split()),
            description=description,
            amount=amount_text_to_minor_units(amount_text),
        )
        return event, result
