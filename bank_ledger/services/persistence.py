"""
Backing file persistence.

Reads and writes the whole set of customers, accounts and
transactions as a single JSON document (see schemas/snapshot.py).

Load outcomes:
- file missing or empty: start with no customers
- file unreadable: LedgerFileUnreadable
- file present but invalid (including bad UTF-8): CorruptLedgerFile,
  never partial state

Saves go to a temporary sibling file which then replaces the
target, so an interrupted save leaves the previous file intact.
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from bank_ledger.errors import (
    CorruptLedgerFile,
    LedgerFileUnreadable,
    PersistenceFailure,
)
from bank_ledger.models.account import Account
from bank_ledger.models.customer import Customer
from bank_ledger.models.transaction import Transaction
from bank_ledger.schemas.snapshot import (
    AccountRecord,
    CustomerRecord,
    LedgerFile,
    TransactionRecord,
)

logger = logging.getLogger(__name__)


def encode_ledger(customers: Iterable[Customer]) -> str:
    """Render customers as the backing file's JSON text."""
    document = LedgerFile(
        customers=[
            CustomerRecord(
                customer_id=customer.customer_id,
                name=customer.name,
                accounts=[
                    AccountRecord(
                        account_number=account.account_number,
                        balance=account.balance,
                        transactions=[
                            TransactionRecord.model_validate(txn)
                            for txn in account.transactions
                        ],
                    )
                    for account in customer.view_accounts()
                ],
            )
            for customer in customers
        ]
    )
    return document.model_dump_json(indent=2)


def decode_ledger(text: str, source: str = "<ledger>") -> dict[int, Customer]:
    """
    Parse backing file text into customers keyed by id.

    Raises CorruptLedgerFile if the document does not match the
    schema, repeats a customer id or account number, or holds an
    account whose stored balance disagrees with its history.
    """
    if not text.strip():
        return {}

    try:
        document = LedgerFile.model_validate_json(text)
    except ValidationError as e:
        raise CorruptLedgerFile(f"{source}: {e}") from e

    customers: dict[int, Customer] = {}
    for record in document.customers:
        if record.customer_id in customers:
            raise CorruptLedgerFile(
                f"{source}: customer {record.customer_id} appears twice"
            )
        customer = Customer(record.name, record.customer_id)

        for account_record in record.accounts:
            transactions = [
                Transaction(**txn.model_dump())
                for txn in account_record.transactions
            ]
            try:
                account = Account.restore(
                    account_record.account_number, transactions
                )
                customer.attach(account)
            except ValueError as e:
                raise CorruptLedgerFile(f"{source}: {e}") from e

            if account.balance != account_record.balance:
                raise CorruptLedgerFile(
                    f"{source}: account {account.account_number} balance "
                    f"{account_record.balance} does not match its "
                    f"transactions ({account.balance})"
                )

        customers[customer.customer_id] = customer

    return customers


def load_customers(path: str | os.PathLike) -> dict[int, Customer]:
    """Read the backing file at path. See the module docstring for outcomes."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No ledger file at %s, starting empty", path)
        return {}
    except UnicodeDecodeError as e:
        raise CorruptLedgerFile(f"{path}: not valid UTF-8 ({e})") from e
    except OSError as e:
        raise LedgerFileUnreadable(f"Could not read ledger file {path}: {e}") from e

    customers = decode_ledger(text, source=str(path))
    logger.info("Loaded %d customers from %s", len(customers), path)
    return customers


def save_customers(path: str | os.PathLike, customers: Iterable[Customer]) -> None:
    """
    Overwrite the backing file with the given customers.

    Raises PersistenceFailure if the file cannot be written.
    """
    path = Path(path)
    text = encode_ledger(customers)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise PersistenceFailure(f"Could not write ledger file {path}: {e}") from e
    logger.info("Saved ledger to %s", path)
