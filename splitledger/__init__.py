"""
splitledger - Personal Expense Ledger

Records simple entries and shared "who paid / who owes" expenses to
local files, then lists, sums, and settles them.

DESIGN PRINCIPLES:
1. The ledger is append-only
2. Money is integer minor units; nothing is rounded
3. Fail early, fail visibly: bad input never reaches the ledger
4. Corrupt records are skipped and reported, never silently dropped
5. Balances are derived from the full ledger on every request
"""

__version__ = "1.0.0"
