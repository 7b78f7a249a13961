"""
Shared enumerations for the ledger models.

The string values are what gets written to the backing file,
so renaming a member is a file format change.
"""

import enum


class TransactionType(str, enum.Enum):
    """The business operation that produced a transaction."""
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"


class EntryType(str, enum.Enum):
    """Direction of a transaction against its account's balance."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class StoreState(str, enum.Enum):
    """Lifecycle of a LedgerStore."""
    UNINITIALIZED = "UNINITIALIZED"
    READY = "READY"
    CLOSED = "CLOSED"
