"""
Core Data Models for splitledger

These models define the strict schemas for everything recorded in, or
derived from, the ledger. They are designed to:
1. Enforce the ledger invariants at construction time
2. Provide clear validation error messages
3. Be immutable once built (the ledger is append-only)

DESIGN DECISION: All amounts are integer minor units (see models.money).
Decimal text only exists at the edges: user input and persisted records.
"""

from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from splitledger.models.money import format_minor_units


# =============================================================================
# PARTICIPANT IDENTIFIERS
# =============================================================================

def check_participant_id(value: str) -> str:
    """
    Validate a single participant identifier.

    Identifiers are persisted space-separated, so whitespace inside one
    would silently turn it into two people.
    """
    value = value.strip()
    if not value:
        raise ValueError("Participant identifier cannot be empty")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"Participant identifier cannot contain whitespace: {value!r}")
    return value


# =============================================================================
# LEDGER RECORDS
# =============================================================================

class Entry(BaseModel):
    """A simple ledger entry: an amount and what it was for."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: int = Field(
        ...,
        gt=0,
        description="Amount in minor units"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )

    @property
    def amount_display(self) -> str:
        return format_minor_units(self.amount)


class ExpenseEvent(BaseModel):
    """
    One shared expense: who paid, for whom, how much.

    CRITICAL: Events are immutable once recorded. The ledger only ever
    appends new events; balances are always re-derived from the full
    sequence.

    Payees form a set. Duplicates are collapsed keeping the first
    occurrence so the display order matches what the user typed.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    payer: str = Field(
        ...,
        description="Participant who fronted the money"
    )
    payees: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Participants sharing the cost (may include the payer)"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free text, not used in computation"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Amount in minor units"
    )

    @field_validator("payer")
    @classmethod
    def validate_payer(cls, v: str) -> str:
        return check_participant_id(v)

    @field_validator("payees")
    @classmethod
    def validate_payees(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(check_participant_id(p) for p in v))

    @property
    def amount_display(self) -> str:
        return format_minor_units(self.amount)


class Transfer(BaseModel):
    """A proposed payment that moves money from a debtor to a creditor."""
    model_config = ConfigDict(frozen=True)

    sender: str = Field(
        ...,
        description="Debtor who pays"
    )
    recipient: str = Field(
        ...,
        description="Creditor who receives"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Amount in minor units"
    )

    @model_validator(mode="after")
    def validate_parties(self) -> "Transfer":
        if self.sender == self.recipient:
            raise ValueError("Transfer sender and recipient must differ")
        return self

    @property
    def amount_display(self) -> str:
        return format_minor_units(self.amount)


class SettlementReport(BaseModel):
    """
    Result of one settlement request.

    Balances are derived, never persisted. Transfers, when applied to the
    balances, zero every participant.
    """

    balances: dict[str, int] = Field(
        default_factory=dict,
        description="Signed net position per participant (positive = is owed)"
    )
    transfers: list[Transfer] = Field(
        default_factory=list,
        description="Transfers that settle all balances"
    )
    recorded: bool = Field(
        default=False,
        description="Were closing records appended to the ledger?"
    )

    @property
    def is_settled(self) -> bool:
        """True when nobody owes anything."""
        return not self.transfers


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Result of validating one add request."""

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]
