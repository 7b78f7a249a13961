"""Bank Ledger: customers, accounts and a file-backed ledger store."""

__version__ = "0.1.0"
