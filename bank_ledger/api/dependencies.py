"""
FastAPI dependencies.
"""

from fastapi import Request

from bank_ledger.services.ledger_store import LedgerStore


def get_store(request: Request) -> LedgerStore:
    """
    Provide the application's LedgerStore.

    The store is opened once by the application lifespan and
    shared by every request; it serializes access internally.
    """
    return request.app.state.store
