"""
Customer model.

Represents an account holder. A customer owns its accounts
outright; account numbers are unique within one customer.
"""

from bank_ledger.errors import DuplicateAccount
from bank_ledger.models.account import Account


class Customer:

    def __init__(self, name: str, customer_id: int):
        self.name = name
        self.customer_id = customer_id
        # Keyed by account number; dicts keep creation order
        self.accounts: dict[int, Account] = {}

    def add_account(self, account_number: int, opening_balance=0) -> Account:
        """
        Open a new account for this customer.

        Raises DuplicateAccount if the number is already in use
        by this customer, and InvalidAmount for a negative
        opening balance. Nothing is stored if either check fails.
        """
        if account_number in self.accounts:
            raise DuplicateAccount(account_number)

        account = Account(account_number, opening_balance)
        self.accounts[account_number] = account
        return account

    def attach(self, account: Account) -> None:
        """Store an already-built account (used when loading from disk)."""
        if account.account_number in self.accounts:
            raise DuplicateAccount(account.account_number)
        self.accounts[account.account_number] = account

    def get_account(self, account_number: int) -> Account | None:
        return self.accounts.get(account_number)

    def view_accounts(self) -> list[Account]:
        return list(self.accounts.values())

    def __repr__(self) -> str:
        return f"<Customer {self.customer_id} {self.name}>"
