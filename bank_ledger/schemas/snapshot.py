"""
Pydantic schemas for the backing file.

The file is one JSON document. Names are JSON strings and
amounts are decimal strings, so nothing depends on delimiter
placement and every amount reloads exactly as it was saved.
Transaction history is stored in full.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from bank_ledger.models.enums import EntryType, TransactionType


FILE_FORMAT = "bank-ledger"
FILE_VERSION = 1


class TransactionRecord(BaseModel):
    sequence: int = Field(ge=1)
    transaction_type: TransactionType
    entry_type: EntryType
    amount: Decimal = Field(gt=0, allow_inf_nan=False)
    created_at: datetime
    counterparty_account_number: int | None = None

    model_config = {"from_attributes": True}


class AccountRecord(BaseModel):
    account_number: int
    balance: Decimal = Field(ge=0, allow_inf_nan=False)
    transactions: list[TransactionRecord] = Field(default_factory=list)


class CustomerRecord(BaseModel):
    customer_id: int
    name: str
    accounts: list[AccountRecord] = Field(default_factory=list)


class LedgerFile(BaseModel):
    """Top-level document written to LEDGER_FILE."""
    format: Literal["bank-ledger"] = FILE_FORMAT
    version: Literal[1] = FILE_VERSION
    customers: list[CustomerRecord] = Field(default_factory=list)
