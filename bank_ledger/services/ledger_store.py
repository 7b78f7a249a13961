"""
Ledger store: the banking service that owns every customer.

This service enforces the rules that span accounts:
1. Customer ids are unique across the store
2. Identifiers are resolved before anything is mutated
3. A transfer's two legs are applied together or not at all
4. Only the store reads and writes the backing file

The store has an explicit lifecycle. It is created
UNINITIALIZED, open() loads the backing file and makes it
READY, and close() saves the file and makes it CLOSED.
Use open_store() (or the store itself as a context manager)
so the save is attempted on every exit path.
"""

import logging
import os
import threading
from contextlib import contextmanager
from decimal import Decimal
from pathlib import Path
from typing import Iterator

from bank_ledger.errors import (
    AccountNotFound,
    AmbiguousAccount,
    CustomerNotFound,
    DuplicateCustomer,
    LedgerError,
    LedgerFileUnreadable,
    PersistenceFailure,
    StoreNotReady,
)
from bank_ledger.models.account import Account
from bank_ledger.models.customer import Customer
from bank_ledger.models.enums import StoreState
from bank_ledger.models.transaction import Transaction
from bank_ledger.services.legacy import load_legacy
from bank_ledger.services.persistence import load_customers, save_customers

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    All customer and account operations pass through this store.

    One re-entrant lock guards the whole store. Every
    check-then-mutate sequence runs under it, so concurrent
    callers never see a transfer with only one leg applied.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self.state = StoreState.UNINITIALIZED
        self.customers: dict[int, Customer] = {}
        self._lock = threading.RLock()
        # Set when open() could not read an existing file; that file
        # must not be replaced by what is in memory.
        self._load_error: LedgerFileUnreadable | None = None

    # --- Lifecycle ---

    def open(self) -> "LedgerStore":
        """
        Load the backing file and become READY.

        A file that exists but cannot be read still opens an empty
        store, but save() then refuses to overwrite that file.
        CorruptLedgerFile is raised and the store stays
        UNINITIALIZED if the file is readable but invalid.
        """
        with self._lock:
            if self.state != StoreState.UNINITIALIZED:
                raise StoreNotReady(self.state)
            try:
                self.customers = load_customers(self.path)
            except LedgerFileUnreadable as e:
                logger.warning("%s; starting empty, file will not be overwritten", e)
                self.customers = {}
                self._load_error = e
            self.state = StoreState.READY
        return self

    def close(self) -> None:
        """
        Save the backing file and become CLOSED.

        The store is CLOSED afterwards even if the save raises
        PersistenceFailure. Closing a store that was never
        opened, or is already closed, does nothing.
        """
        with self._lock:
            if self.state != StoreState.READY:
                return
            try:
                self.save()
            finally:
                self.state = StoreState.CLOSED

    def save(self) -> None:
        """
        Write the current state to the backing file without closing.

        Raises PersistenceFailure, leaving the file untouched, if the
        file could not be read when the store was opened.
        """
        with self._lock:
            self._require_ready()
            if self._load_error is not None:
                raise PersistenceFailure(
                    f"Refusing to overwrite {self.path}, which could not be "
                    f"read when the store was opened: {self._load_error}"
                )
            save_customers(self.path, self.customers.values())

    def __enter__(self) -> "LedgerStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_ready(self) -> None:
        if self.state != StoreState.READY:
            raise StoreNotReady(self.state)

    # --- Customers ---

    def add_customer(self, name: str, customer_id: int) -> Customer:
        """Create a customer. Raises DuplicateCustomer if the id is taken."""
        with self._lock:
            self._require_ready()
            if customer_id in self.customers:
                raise DuplicateCustomer(customer_id)
            customer = Customer(name, customer_id)
            self.customers[customer_id] = customer
        logger.info("Customer %s with ID %d added", name, customer_id)
        return customer

    def get_customer(self, customer_id: int) -> Customer | None:
        with self._lock:
            self._require_ready()
            return self.customers.get(customer_id)

    def list_customers(self) -> list[Customer]:
        with self._lock:
            self._require_ready()
            return list(self.customers.values())

    def _resolve_customer(self, customer_id: int) -> Customer:
        customer = self.customers.get(customer_id)
        if customer is None:
            raise CustomerNotFound(customer_id)
        return customer

    def _resolve_account(self, customer_id: int, account_number: int) -> Account:
        account = self._resolve_customer(customer_id).get_account(account_number)
        if account is None:
            raise AccountNotFound(account_number)
        return account

    # --- Accounts ---

    def add_account(
        self, customer_id: int, account_number: int, opening_balance=0
    ) -> Account:
        with self._lock:
            self._require_ready()
            account = self._resolve_customer(customer_id).add_account(
                account_number, opening_balance
            )
        logger.info(
            "Account %d created for customer %d", account_number, customer_id
        )
        return account

    def get_account(self, customer_id: int, account_number: int) -> Account:
        """Raises CustomerNotFound or AccountNotFound."""
        with self._lock:
            self._require_ready()
            return self._resolve_account(customer_id, account_number)

    def find_account(self, account_number: int) -> Account | None:
        """
        Look an account up across every customer.

        Returns None if no customer holds the number, and raises
        AmbiguousAccount if more than one does.
        """
        with self._lock:
            self._require_ready()
            matches = {}
            for customer in self.customers.values():
                account = customer.get_account(account_number)
                if account is not None:
                    matches[customer.customer_id] = account
            if len(matches) > 1:
                raise AmbiguousAccount(account_number, list(matches))
            return next(iter(matches.values()), None)

    def list_accounts(self, customer_id: int) -> list[Account]:
        with self._lock:
            self._require_ready()
            return self._resolve_customer(customer_id).view_accounts()

    def get_balance(self, customer_id: int, account_number: int) -> Decimal:
        with self._lock:
            self._require_ready()
            return self._resolve_account(customer_id, account_number).balance

    def get_transaction_history(
        self, customer_id: int, account_number: int
    ) -> list[Transaction]:
        with self._lock:
            self._require_ready()
            account = self._resolve_account(customer_id, account_number)
            return account.transaction_history()

    # --- Money movement ---

    def perform_deposit(
        self, customer_id: int, account_number: int, amount
    ) -> Transaction:
        with self._lock:
            self._require_ready()
            account = self._resolve_account(customer_id, account_number)
            txn = account.deposit(amount)
        logger.info("Deposited %s to account %d", txn.amount, account_number)
        return txn

    def perform_withdrawal(
        self, customer_id: int, account_number: int, amount
    ) -> Transaction:
        with self._lock:
            self._require_ready()
            account = self._resolve_account(customer_id, account_number)
            try:
                txn = account.withdraw(amount)
            except LedgerError as e:
                logger.warning("Withdrawal from %d rejected: %s", account_number, e)
                raise
        logger.info("Withdrew %s from account %d", txn.amount, account_number)
        return txn

    def perform_transfer(
        self,
        customer_id: int,
        from_account_number: int,
        to_account_number: int,
        amount,
        to_customer_id: int | None = None,
    ) -> tuple[Transaction, Transaction]:
        """
        Transfer between two accounts.

        The target is looked up under to_customer_id when given.
        Otherwise the source customer's own accounts are tried
        first, then every other customer's; AmbiguousAccount is
        raised if several other customers hold the number.
        Returns the (debit, credit) pair.
        """
        with self._lock:
            self._require_ready()
            source = self._resolve_account(customer_id, from_account_number)
            if to_customer_id is not None:
                target = self._resolve_account(to_customer_id, to_account_number)
            else:
                target = self._resolve_customer(customer_id).get_account(
                    to_account_number
                ) or self.find_account(to_account_number)
                if target is None:
                    raise AccountNotFound(to_account_number)

            try:
                debit, credit = source.transfer(target, amount)
            except LedgerError as e:
                logger.warning(
                    "Transfer %d -> %d rejected: %s",
                    from_account_number, to_account_number, e,
                )
                raise
        logger.info(
            "Transferred %s from account %d to account %d",
            debit.amount, from_account_number, to_account_number,
        )
        return debit, credit

    # --- Import ---

    def import_legacy(self, path: str | os.PathLike) -> int:
        """
        Merge customers from an old comma-separated file.

        All-or-nothing: if any imported customer id already
        exists, DuplicateCustomer is raised and nothing is added.
        Returns the number of customers imported.
        """
        imported = load_legacy(path)
        with self._lock:
            self._require_ready()
            for customer_id in imported:
                if customer_id in self.customers:
                    raise DuplicateCustomer(customer_id)
            self.customers.update(imported)
        logger.info("Imported %d customers from %s", len(imported), path)
        return len(imported)


@contextmanager
def open_store(path: str | os.PathLike) -> Iterator[LedgerStore]:
    """
    Open the store at path for the duration of a with block.

    The store is saved when the block exits, whether it
    finishes normally or raises.
    """
    store = LedgerStore(path).open()
    try:
        yield store
    finally:
        store.close()
