"""
Error taxonomy for ledger operations.

Every error is a recoverable, reported outcome. All of them
derive from ValueError, which the API layer maps to HTTP errors.
"""


class LedgerError(ValueError):
    """Base class for every ledger outcome that is not a success."""


class CustomerNotFound(LedgerError):
    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class AccountNotFound(LedgerError):
    def __init__(self, account_number: int):
        self.account_number = account_number
        super().__init__(f"Account {account_number} not found")


class DuplicateCustomer(LedgerError):
    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} already exists")


class DuplicateAccount(LedgerError):
    def __init__(self, account_number: int):
        self.account_number = account_number
        super().__init__(f"Account {account_number} already exists")


class InsufficientFunds(LedgerError):
    def __init__(self, account_number: int, available, requested):
        self.account_number = account_number
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient balance on account {account_number}: "
            f"available={available}, requested={requested}"
        )


class InvalidAmount(LedgerError):
    def __init__(self, amount, reason: str = "amount must be positive and finite"):
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class SameAccountTransfer(LedgerError):
    def __init__(self, account_number: int):
        self.account_number = account_number
        super().__init__(
            f"Cannot transfer from account {account_number} to itself"
        )


class StoreNotReady(LedgerError):
    def __init__(self, state):
        self.state = state
        super().__init__(f"Ledger store is not ready (state: {state.value})")


class PersistenceFailure(LedgerError):
    """The backing file could not be read or written."""


class CorruptLedgerFile(PersistenceFailure):
    """The backing file exists but does not describe a valid ledger."""


class LedgerFileUnreadable(PersistenceFailure):
    """The backing file exists but could not be read."""


class AmbiguousAccount(LedgerError):
    def __init__(self, account_number: int, customer_ids: list[int]):
        self.account_number = account_number
        self.customer_ids = customer_ids
        super().__init__(
            f"Account {account_number} is held by customers "
            f"{', '.join(str(c) for c in customer_ids)}; name the target customer"
        )
