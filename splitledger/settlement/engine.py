"""
Settlement Engine

DESIGN DECISION: Settlement is a pure, deterministic computation.
The engine never touches files or the terminal. It takes the full
sequence of shared expenses and returns:
- balances: the signed net position of every participant
- transfers: a short list of payments that zeroes every balance

GUARANTEES:
- All arithmetic is on integer minor units; nothing is rounded
- Balances always sum to exactly zero
- The same events always produce the same balances and transfers,
  whatever order payees were typed in
- n participants with a non-zero balance need at most n - 1 transfers
"""

from typing import Iterable, Mapping

from splitledger.models.ledger import ExpenseEvent, Transfer

SETTLEMENT_DESCRIPTION = "settlement"


class SettlementError(Exception):
    """Base exception for settlement failures."""
    pass


class UnbalancedError(SettlementError):
    """
    Balances do not sum to zero.

    This can only come from a bug in how events were recorded or read.
    It is never corrected silently.
    """

    def __init__(self, total: int):
        super().__init__(f"Balances do not sum to zero (off by {total} minor units)")
        self.total = total


def split_shares(amount: int, payees: Iterable[str]) -> dict[str, int]:
    """
    Split an amount between payees, exactly.

    Each payee gets amount // n. The remainder is handed out one minor
    unit at a time to the first payees in lexicographic order, so the
    shares always add up to the amount.

    >>> split_shares(100, ["C", "A", "B"])
    {'A': 34, 'B': 33, 'C': 33}
    """
    ordered = sorted(set(payees))
    if not ordered:
        raise ValueError("Cannot split an amount between zero payees")
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got {amount}")

    base, remainder = divmod(amount, len(ordered))
    return {
        payee: base + (1 if index < remainder else 0)
        for index, payee in enumerate(ordered)
    }


def compute_balances(events: Iterable[ExpenseEvent]) -> dict[str, int]:
    """
    Net balance per participant over all events.

    The payer is credited the full amount; every payee is debited their
    share. A payer who is also a payee gets both.
    Positive means the participant is owed money.
    """
    balances: dict[str, int] = {}

    for event in events:
        balances[event.payer] = balances.get(event.payer, 0) + event.amount
        for payee, share in split_shares(event.amount, event.payees).items():
            balances[payee] = balances.get(payee, 0) - share

    return dict(sorted(balances.items()))


def settle(balances: Mapping[str, int]) -> list[Transfer]:
    """
    Greedy largest-creditor / largest-debtor settlement.

    Each round pairs the participant owed the most with the participant
    owing the most (ties broken by identifier, ascending) and moves the
    smaller of the two amounts. Every round zeroes at least one of them.

    Raises:
        UnbalancedError: If the balances do not sum to zero
    """
    total = sum(balances.values())
    if total != 0:
        raise UnbalancedError(total)

    creditors = {p: b for p, b in balances.items() if b > 0}
    debtors = {p: -b for p, b in balances.items() if b < 0}
    transfers: list[Transfer] = []

    while creditors and debtors:
        creditor = min(creditors, key=lambda p: (-creditors[p], p))
        debtor = min(debtors, key=lambda p: (-debtors[p], p))
        amount = min(creditors[creditor], debtors[debtor])

        transfers.append(Transfer(sender=debtor, recipient=creditor, amount=amount))

        creditors[creditor] -= amount
        debtors[debtor] -= amount
        if creditors[creditor] == 0:
            del creditors[creditor]
        if debtors[debtor] == 0:
            del debtors[debtor]

    return transfers


def apply_transfers(
    balances: Mapping[str, int],
    transfers: Iterable[Transfer],
) -> dict[str, int]:
    """Return the balances after every transfer has been paid."""
    result = dict(balances)
    for transfer in transfers:
        result[transfer.sender] = result.get(transfer.sender, 0) + transfer.amount
        result[transfer.recipient] = result.get(transfer.recipient, 0) - transfer.amount
    return result


def settlement_events(transfers: Iterable[Transfer]) -> list[ExpenseEvent]:
    """
    Closing records for a settlement.

    Paying a transfer is recorded as the sender paying the full amount
    on behalf of the recipient alone, which moves both balances by
    exactly the transfer amount.
    """
    return [
        ExpenseEvent(
            payer=transfer.sender,
            payees=(transfer.recipient,),
            description=SETTLEMENT_DESCRIPTION,
            amount=transfer.amount,
        )
        for transfer in transfers
    ]
