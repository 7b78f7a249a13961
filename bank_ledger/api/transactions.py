"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from bank_ledger.api.dependencies import get_store
from bank_ledger.errors import (
    AccountNotFound,
    CustomerNotFound,
    LedgerError,
    StoreNotReady,
)
from bank_ledger.schemas.transaction import (
    DepositRequest,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
    WithdrawalRequest,
)
from bank_ledger.services.ledger_store import LedgerStore

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/deposit", response_model=TransactionResponse, status_code=201)
def deposit(
    request: DepositRequest,
    store: LedgerStore = Depends(get_store),
):
    """Deposit money into an account."""
    try:
        return store.perform_deposit(
            request.customer_id, request.account_number, request.amount
        )
    except (CustomerNotFound, AccountNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/withdraw", response_model=TransactionResponse, status_code=201)
def withdraw(
    request: WithdrawalRequest,
    store: LedgerStore = Depends(get_store),
):
    """Withdraw money from an account."""
    try:
        return store.perform_withdrawal(
            request.customer_id, request.account_number, request.amount
        )
    except (CustomerNotFound, AccountNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/transfer", response_model=TransferResponse, status_code=201)
def transfer(
    request: TransferRequest,
    store: LedgerStore = Depends(get_store),
):
    """
    Transfer money between two accounts.

    Returns both transaction records: the debit on the source
    and the credit on the destination.
    """
    try:
        debit, credit = store.perform_transfer(
            request.customer_id,
            request.source_account_number,
            request.destination_account_number,
            request.amount,
            to_customer_id=request.destination_customer_id,
        )
    except (CustomerNotFound, AccountNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreNotReady as e:
        raise HTTPException(status_code=503, detail=str(e))
    except LedgerError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TransferResponse(
        debit=TransactionResponse.model_validate(debit),
        credit=TransactionResponse.model_validate(credit),
    )
