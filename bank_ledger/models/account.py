"""
Account model.

An account owns a balance and the append-only list of
transactions that produced it. The balance is kept alongside
the history rather than recomputed, and every mutation goes
through one of the operations below so the two never drift:

    balance == sum(t.signed_amount for t in transactions)

Withdrawals and outgoing transfers are checked against the
balance before anything is changed, so a rejected operation
leaves the account exactly as it was.
"""

from decimal import Decimal, InvalidOperation

from bank_ledger.errors import InsufficientFunds, InvalidAmount, SameAccountTransfer
from bank_ledger.models.enums import EntryType, TransactionType
from bank_ledger.models.transaction import Transaction


def to_amount(value, allow_zero: bool = False) -> Decimal:
    """
    Convert a caller-supplied amount to a Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1")
    rather than its binary expansion. Raises InvalidAmount
    for anything that is not a finite positive number
    (or zero, when allow_zero is set).
    """
    if isinstance(value, bool):
        raise InvalidAmount(value, "amount must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmount(value, "amount must be a number")

    if not amount.is_finite():
        raise InvalidAmount(value, "amount must be finite")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidAmount(value)
    return amount


# Direction each non-transfer type must have; transfers go either way
ENTRY_TYPE_FOR = {
    TransactionType.DEPOSIT: EntryType.CREDIT,
    TransactionType.WITHDRAWAL: EntryType.DEBIT,
}


def _check_record(account_number: int, txn: Transaction) -> None:
    where = f"Account {account_number}: transaction {txn.sequence}"
    expected = ENTRY_TYPE_FOR.get(txn.transaction_type)
    if expected is not None and txn.entry_type != expected:
        raise ValueError(
            f"{where} is a {txn.transaction_type.value} "
            f"but has entry type {txn.entry_type.value}"
        )

    is_transfer = txn.transaction_type == TransactionType.TRANSFER
    if is_transfer != (txn.counterparty_account_number is not None):
        raise ValueError(
            f"{where}: only transfers have a counterparty account"
        )
    if is_transfer and txn.counterparty_account_number == account_number:
        raise ValueError(f"{where} is a transfer to itself")


class Account:

    def __init__(self, account_number: int, opening_balance=0):
        self.account_number = account_number
        self.balance = Decimal("0")
        self.transactions: list[Transaction] = []

        # An opening balance is recorded as a deposit so the
        # history explains the whole balance.
        opening = to_amount(opening_balance, allow_zero=True)
        if opening > 0:
            self.deposit(opening)

    @classmethod
    def restore(
        cls, account_number: int, transactions: list[Transaction]
    ) -> "Account":
        """
        Rebuild an account from a persisted history.

        Raises ValueError if the history is not numbered 1..n,
        holds a record whose type and direction disagree, or
        would take the balance below zero at any point.
        """
        account = cls(account_number)
        running = Decimal("0")
        for expected, txn in enumerate(transactions, start=1):
            if txn.sequence != expected:
                raise ValueError(
                    f"Account {account_number}: expected transaction "
                    f"{expected}, found {txn.sequence}"
                )
            _check_record(account_number, txn)
            running += txn.signed_amount
            if running < 0:
                raise ValueError(
                    f"Account {account_number}: transaction "
                    f"{txn.sequence} overdraws the account"
                )
        account.transactions = list(transactions)
        account.balance = running
        return account

    def _next_sequence(self) -> int:
        return len(self.transactions) + 1

    def _check_funds(self, amount: Decimal) -> None:
        if amount > self.balance:
            raise InsufficientFunds(self.account_number, self.balance, amount)

    def deposit(self, amount) -> Transaction:
        """Credit the account. Raises InvalidAmount for a non-positive amount."""
        amount = to_amount(amount)
        txn = Transaction.record(
            self._next_sequence(),
            TransactionType.DEPOSIT,
            EntryType.CREDIT,
            amount,
        )
        self.balance += amount
        self.transactions.append(txn)
        return txn

    def withdraw(self, amount) -> Transaction:
        """
        Debit the account.

        Raises InsufficientFunds, with no change to the account,
        if the amount is larger than the balance.
        """
        amount = to_amount(amount)
        self._check_funds(amount)
        txn = Transaction.record(
            self._next_sequence(),
            TransactionType.WITHDRAWAL,
            EntryType.DEBIT,
            amount,
        )
        self.balance -= amount
        self.transactions.append(txn)
        return txn

    def transfer(
        self, target: "Account", amount
    ) -> tuple[Transaction, Transaction]:
        """
        Move money from this account to target.

        Both legs are validated and built before either account
        is touched, then applied together. Only the source balance
        is checked. Returns the (debit, credit) transaction pair.
        """
        amount = to_amount(amount)
        if target is self:
            raise SameAccountTransfer(self.account_number)
        self._check_funds(amount)

        debit = Transaction.record(
            self._next_sequence(),
            TransactionType.TRANSFER,
            EntryType.DEBIT,
            amount,
            counterparty_account_number=target.account_number,
        )
        credit = Transaction.record(
            target._next_sequence(),
            TransactionType.TRANSFER,
            EntryType.CREDIT,
            amount,
            counterparty_account_number=self.account_number,
        )

        self.balance -= amount
        self.transactions.append(debit)
        target.balance += amount
        target.transactions.append(credit)
        return debit, credit

    def balance_report(self) -> str:
        return f"Account Number: {self.account_number}, Balance: ${self.balance}"

    def transaction_history(self) -> list[Transaction]:
        """Transactions in the order they happened."""
        return list(self.transactions)

    def __repr__(self) -> str:
        return f"<Account {self.account_number} balance={self.balance}>"
