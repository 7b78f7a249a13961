"""
Import of the old comma-separated customer file.

Layout, one block per customer:

    1001,Alice
    2001,400.000000
    2002,0.000000
    <blank line>

The old writer never emitted the blank separator, so a block
also ends at the first line that does not parse as
``accountNumber,balance``; that line starts the next customer.
Names run to the end of the line and may contain commas.
Customers whose name is itself a number cannot be told apart
from accounts in this format, which is why it is only read,
never written.

Balances become opening deposits; the old format has no history.
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path

from bank_ledger.errors import CorruptLedgerFile, LedgerError, PersistenceFailure
from bank_ledger.models.customer import Customer

logger = logging.getLogger(__name__)


def _account_fields(line: str) -> tuple[int, Decimal] | None:
    fields = line.split(",")
    if len(fields) != 2:
        return None
    try:
        return int(fields[0]), Decimal(fields[1].strip())
    except (ValueError, InvalidOperation):
        return None


def _customer_header(line: str, where: str) -> Customer:
    id_text, sep, name = line.partition(",")
    if not sep or not name.strip():
        raise CorruptLedgerFile(f"{where}: expected 'customerID,name', got {line!r}")
    try:
        customer_id = int(id_text)
    except ValueError:
        raise CorruptLedgerFile(f"{where}: customer id {id_text!r} is not a number")
    return Customer(name.strip(), customer_id)


def parse_legacy(text: str, source: str = "<legacy>") -> dict[int, Customer]:
    customers: dict[int, Customer] = {}
    current: Customer | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        where = f"{source}, line {lineno}"
        if not line:
            current = None
            continue

        if current is not None:
            fields = _account_fields(line)
            if fields is not None:
                account_number, balance = fields
                try:
                    current.add_account(account_number, balance)
                except LedgerError as e:
                    raise CorruptLedgerFile(f"{where}: {e}") from e
                continue

        current = _customer_header(line, where)
        if current.customer_id in customers:
            raise CorruptLedgerFile(
                f"{where}: customer {current.customer_id} appears twice"
            )
        customers[current.customer_id] = current

    return customers


def load_legacy(path: str | os.PathLike) -> dict[int, Customer]:
    """Read a legacy file. Unlike the JSON ledger, a missing file is an error."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PersistenceFailure(f"Could not read legacy file {path}: {e}") from e

    customers = parse_legacy(text, source=str(path))
    logger.info("Parsed %d customers from legacy file %s", len(customers), path)
    return customers
