"""
Transaction model.

A transaction is an immutable record of one balance change on
one account. A transfer produces two of them, one per account,
each numbered by the account that owns it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from bank_ledger.models.enums import EntryType, TransactionType


@dataclass(frozen=True)
class Transaction:
    sequence: int
    transaction_type: TransactionType
    entry_type: EntryType
    amount: Decimal
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    counterparty_account_number: int | None = None

    @classmethod
    def record(
        cls,
        sequence: int,
        transaction_type: TransactionType,
        entry_type: EntryType,
        amount: Decimal,
        counterparty_account_number: int | None = None,
    ) -> "Transaction":
        """Create a transaction stamped with the current time."""
        return cls(
            sequence=sequence,
            transaction_type=transaction_type,
            entry_type=entry_type,
            amount=amount,
            counterparty_account_number=counterparty_account_number,
        )

    @property
    def signed_amount(self) -> Decimal:
        """The amount as it affects the balance: credits add, debits subtract."""
        if self.entry_type == EntryType.CREDIT:
            return self.amount
        return -self.amount

    def describe(self) -> str:
        return (
            f"Transaction ID: {self.sequence}, "
            f"Type: {self.transaction_type.value.title()}, "
            f"Amount: {self.amount}, "
            f"Date: {self.created_at.isoformat()}"
        )

    def to_line(self) -> str:
        """
        Export form: ``id,kind,amount,timestamp``.

        The timestamp is whole Unix seconds. This line is for
        diagnostics and export only; the backing file stores
        transactions in full.
        """
        return (
            f"{self.sequence},{self.transaction_type.value.title()},"
            f"{self.amount},{int(self.created_at.timestamp())}"
        )

    def __repr__(self) -> str:
        return (
            f"<Transaction #{self.sequence} {self.transaction_type.value} "
            f"{self.entry_type.value} {self.amount}>"
        )
