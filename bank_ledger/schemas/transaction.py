"""
Pydantic schemas for transaction operations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bank_ledger.models.enums import EntryType, TransactionType


class DepositRequest(BaseModel):
    customer_id: int
    account_number: int
    amount: Decimal = Field(gt=0, allow_inf_nan=False)


class WithdrawalRequest(BaseModel):
    customer_id: int
    account_number: int
    amount: Decimal = Field(gt=0, allow_inf_nan=False)


class TransferRequest(BaseModel):
    customer_id: int
    source_account_number: int
    destination_account_number: int
    destination_customer_id: int | None = None
    amount: Decimal = Field(gt=0, allow_inf_nan=False)


class TransactionResponse(BaseModel):
    sequence: int
    transaction_type: TransactionType
    entry_type: EntryType
    amount: Decimal
    created_at: datetime
    counterparty_account_number: int | None

    model_config = {"from_attributes": True}


class TransferResponse(BaseModel):
    debit: TransactionResponse
    credit: TransactionResponse
