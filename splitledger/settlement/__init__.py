"""
splitledger Settlement Engine

Turns the shared expense ledger into balances and settling transfers.

Critical Invariants:
- Balances always sum to exactly zero (integer minor units)
- Results never depend on the order of unordered inputs
- At most n - 1 transfers for n participants with a non-zero balance
- Unbalanced input is an error, never corrected
"""

from splitledger.settlement.engine import (
    SETTLEMENT_DESCRIPTION,
    SettlementError,
    UnbalancedError,
    apply_transfers,
    compute_balances,
    settle,
    settlement_events,
    split_shares,
)

__all__ = [
    "SETTLEMENT_DESCRIPTION",
    "SettlementError",
    "UnbalancedError",
    "apply_transfers",
    "compute_balances",
    "settle",
    "settlement_events",
    "split_shares",
]
