"""
Ledger models package.

Plain in-memory objects: the LedgerStore owns Customers,
Customers own Accounts, Accounts own their Transactions.
"""

from bank_ledger.models.enums import EntryType, StoreState, TransactionType
from bank_ledger.models.transaction import Transaction
from bank_ledger.models.account import Account, to_amount
from bank_ledger.models.customer import Customer

__all__ = [
    "EntryType",
    "StoreState",
    "TransactionType",
    "Transaction",
    "Account",
    "to_amount",
    "Customer",
]
