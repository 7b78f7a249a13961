"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and its ledger is open.
"""

from fastapi import APIRouter, Depends

from bank_ledger.api.dependencies import get_store
from bank_ledger.errors import StoreNotReady
from bank_ledger.services.ledger_store import LedgerStore

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(store: LedgerStore = Depends(get_store)):
    """Return application health, including whether the store is READY."""
    try:
        customers = len(store.list_customers())
        status = "healthy"
    except StoreNotReady:
        customers = 0
        status = "degraded"

    return {
        "status": status,
        "service": "bank-ledger",
        "store": store.state.value,
        "customers": customers,
    }
