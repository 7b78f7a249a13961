"""
Pydantic schemas for customer and account operations.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# --- Customer Schemas ---

class CustomerCreate(BaseModel):
    customer_id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=100)


class CustomerResponse(BaseModel):
    customer_id: int
    name: str
    account_numbers: list[int]


# --- Account Schemas ---

class AccountOpen(BaseModel):
    """Request to open a new account."""
    account_number: int = Field(gt=0)
    opening_balance: Decimal = Field(default=Decimal("0"), ge=0, allow_inf_nan=False)


class AccountResponse(BaseModel):
    account_number: int
    balance: Decimal
    transaction_count: int


class AccountBalanceResponse(BaseModel):
    customer_id: int
    account_number: int
    balance: Decimal
