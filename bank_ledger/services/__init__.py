"""Business logic services."""

from bank_ledger.services.ledger_store import LedgerStore, open_store

__all__ = ["LedgerStore", "open_store"]
