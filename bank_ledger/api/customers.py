"""
Customer and account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from bank_ledger.api.dependencies import get_store
from bank_ledger.errors import (
    AccountNotFound,
    CustomerNotFound,
    LedgerError,
    StoreNotReady,
)
from bank_ledger.models.account import Account
from bank_ledger.models.customer import Customer
from bank_ledger.schemas.customer import (
    AccountBalanceResponse,
    AccountOpen,
    AccountResponse,
    CustomerCreate,
    CustomerResponse,
)
from bank_ledger.schemas.transaction import TransactionResponse
from bank_ledger.services.ledger_store import LedgerStore

router = APIRouter(prefix="/customers", tags=["Customers"])


def _customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        customer_id=customer.customer_id,
        name=customer.name,
        account_numbers=list(customer.accounts),
    )


def _account_response(account: Account) -> AccountResponse:
    return AccountResponse(
        account_number=account.account_number,
        balance=account.balance,
        transaction_count=len(account.transactions),
    )


# --- Customer Endpoints ---

@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    request: CustomerCreate,
    store: LedgerStore = Depends(get_store),
):
    """Create a new customer."""
    try:
        customer = store.add_customer(request.name, request.customer_id)
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _customer_response(customer)


@router.get("", response_model=list[CustomerResponse])
def list_customers(store: LedgerStore = Depends(get_store)):
    try:
        customers = store.list_customers()
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [_customer_response(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    store: LedgerStore = Depends(get_store),
):
    try:
        customer = store.get_customer(customer_id)
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    if customer is None:
        raise HTTPException(status_code=404, detail=str(CustomerNotFound(customer_id)))
    return _customer_response(customer)


# --- Account Endpoints ---

@router.post(
    "/{customer_id}/accounts",
    response_model=AccountResponse,
    status_code=201,
)
def open_account(
    customer_id: int,
    request: AccountOpen,
    store: LedgerStore = Depends(get_store),
):
    """
    Open a new account for a customer.

    A non-zero opening balance is recorded as the account's
    first deposit.
    """
    try:
        account = store.add_account(
            customer_id, request.account_number, request.opening_balance
        )
    except CustomerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _account_response(account)


@router.get("/{customer_id}/accounts", response_model=list[AccountResponse])
def list_accounts(
    customer_id: int,
    store: LedgerStore = Depends(get_store),
):
    try:
        accounts = store.list_accounts(customer_id)
    except CustomerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [_account_response(a) for a in accounts]


@router.get(
    "/{customer_id}/accounts/{account_number}/balance",
    response_model=AccountBalanceResponse,
)
def get_balance(
    customer_id: int,
    account_number: int,
    store: LedgerStore = Depends(get_store),
):
    try:
        balance = store.get_balance(customer_id, account_number)
    except (CustomerNotFound, AccountNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    return AccountBalanceResponse(
        customer_id=customer_id,
        account_number=account_number,
        balance=balance,
    )


@router.get(
    "/{customer_id}/accounts/{account_number}/transactions",
    response_model=list[TransactionResponse],
)
def get_transaction_history(
    customer_id: int,
    account_number: int,
    store: LedgerStore = Depends(get_store),
):
    """Full history for one account, oldest first."""
    try:
        return store.get_transaction_history(customer_id, account_number)
    except (CustomerNotFound, AccountNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
