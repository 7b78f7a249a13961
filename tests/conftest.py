"""
Shared test fixtures.

Each test gets its own ledger file under pytest's tmp_path,
so tests never touch a real ledger and never see each
other's data.
"""

import pytest
from fastapi.testclient import TestClient

from bank_ledger.api.dependencies import get_store
from bank_ledger.main import app
from bank_ledger.services.ledger_store import LedgerStore


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "customers.json"


@pytest.fixture
def store(ledger_path):
    """Provide an opened store; it is saved and closed after the test."""
    store = LedgerStore(ledger_path).open()
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def client(store):
    """
    Provide a test client backed by the test store.

    We override the get_store dependency so the app uses our
    store instead of opening LEDGER_FILE in its lifespan.
    """
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
