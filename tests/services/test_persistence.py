"""
Tests for the backing file: round trips, load outcomes and
corruption detection.
"""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from bank_ledger.errors import (
    CorruptLedgerFile,
    LedgerFileUnreadable,
    PersistenceFailure,
)
from bank_ledger.models.enums import EntryType, TransactionType
from bank_ledger.services.ledger_store import LedgerStore, open_store
from bank_ledger.services.persistence import (
    decode_ledger,
    encode_ledger,
    load_customers,
    save_customers,
)


def populated(store):
    store.add_customer("Alice", 1001)
    store.add_account(1001, 2001)
    store.add_customer("Bob, Jr.\nthe second", 1002)
    store.add_account(1002, 2002)
    store.add_account(1002, 2003, opening_balance=Decimal("0.10"))
    store.perform_deposit(1001, 2001, 500)
    store.perform_withdrawal(1001, 2001, 100)
    store.perform_transfer(1001, 2001, 2002, 200)


def write_document(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")


def valid_document():
    return {
        "format": "bank-ledger",
        "version": 1,
        "customers": [{
            "customer_id": 1001,
            "name": "Alice",
            "accounts": [{
                "account_number": 2001,
                "balance": "500",
                "transactions": [{
                    "sequence": 1,
                    "transaction_type": "DEPOSIT",
                    "entry_type": "CREDIT",
                    "amount": "500",
                    "created_at": "2024-01-01T00:00:00Z",
                }],
            }],
        }],
    }


# --- Round Trip Tests ---

class TestRoundTrip:

    def test_reload_matches_saved_state(self, ledger_path):
        with open_store(ledger_path) as store:
            populated(store)
            before = {
                c.customer_id: (
                    c.name,
                    {a.account_number: (a.balance, a.transaction_history())
                     for a in c.view_accounts()},
                )
                for c in store.list_customers()
            }

        with open_store(ledger_path) as reloaded:
            after = {
                c.customer_id: (
                    c.name,
                    {a.account_number: (a.balance, a.transaction_history())
                     for a in c.view_accounts()},
                )
                for c in reloaded.list_customers()
            }

        assert after == before
        assert after[1001][1][2001][0] == Decimal("200")
        assert after[1002][1][2002][0] == Decimal("200")

    def test_history_survives_reload(self, ledger_path):
        with open_store(ledger_path) as store:
            populated(store)

        with open_store(ledger_path) as reloaded:
            history = reloaded.get_transaction_history(1002, 2002)
            assert len(history) == 1
            assert history[0].transaction_type == TransactionType.TRANSFER
            assert history[0].entry_type == EntryType.CREDIT
            assert history[0].counterparty_account_number == 2001

            # numbering continues after the restored history
            txn = reloaded.perform_deposit(1001, 2001, 1)
            assert txn.sequence == 4

    def test_amounts_are_exact(self, ledger_path):
        with open_store(ledger_path) as store:
            store.add_customer("Carol", 7)
            store.add_account(7, 70)
            for _ in range(10):
                store.perform_deposit(7, 70, "0.1")

        with open_store(ledger_path) as reloaded:
            assert reloaded.get_balance(7, 70) == Decimal("1.0")

    def test_encode_decode_in_memory(self, store):
        populated(store)
        customers = decode_ledger(encode_ledger(store.list_customers()))
        assert sorted(customers) == [1001, 1002]
        assert customers[1002].name == "Bob, Jr.\nthe second"

    def test_save_overwrites(self, ledger_path):
        with open_store(ledger_path) as store:
            populated(store)
        save_customers(ledger_path, [])
        assert load_customers(ledger_path) == {}


# --- Load Outcome Tests ---

class TestLoadOutcomes:

    def test_missing_file_is_empty(self, tmp_path):
        assert load_customers(tmp_path / "nope.json") == {}

    def test_empty_file_is_empty(self, ledger_path):
        ledger_path.write_text("", encoding="utf-8")
        assert load_customers(ledger_path) == {}

    def test_unreadable_file_raises(self, tmp_path):
        # A directory where the file should be cannot be read as text
        path = tmp_path / "ledger.json"
        path.mkdir()
        with pytest.raises(LedgerFileUnreadable):
            load_customers(path)

    def test_unreadable_file_is_not_overwritten(self, ledger_path, monkeypatch):
        write_document(ledger_path, valid_document())
        original = ledger_path.read_bytes()

        def refuse(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_text", refuse)
        store = LedgerStore(ledger_path).open()
        monkeypatch.undo()

        assert store.state.value == "READY"
        assert store.list_customers() == []

        store.add_customer("Mallory", 666)
        with pytest.raises(PersistenceFailure, match="Refusing to overwrite"):
            store.close()
        assert store.state.value == "CLOSED"
        assert ledger_path.read_bytes() == original

    def test_invalid_utf8_is_corrupt_and_preserved(self, ledger_path):
        raw = json.dumps(valid_document()).encode("utf-8")
        raw = raw.replace(b"Alice", b"Al\xffce")
        ledger_path.write_bytes(raw)

        store = LedgerStore(ledger_path)
        with pytest.raises(CorruptLedgerFile, match="UTF-8"):
            store.open()
        store.close()

        assert store.state.value == "UNINITIALIZED"
        assert ledger_path.read_bytes() == raw

    def test_failed_save_removes_temp_file(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.mkdir()
        with pytest.raises(PersistenceFailure):
            save_customers(path, [])
        assert not (tmp_path / "ledger.json.tmp").exists()


class TestCorruption:

    def test_valid_document_loads(self, ledger_path):
        write_document(ledger_path, valid_document())
        customers = load_customers(ledger_path)
        assert customers[1001].get_account(2001).balance == Decimal("500")

    def test_not_json(self, ledger_path):
        ledger_path.write_text("1001,Alice\n2001,500\n", encoding="utf-8")
        with pytest.raises(CorruptLedgerFile):
            load_customers(ledger_path)

    def test_corrupt_file_prevents_open(self, ledger_path):
        ledger_path.write_text("{not json", encoding="utf-8")
        store = LedgerStore(ledger_path)
        with pytest.raises(CorruptLedgerFile):
            store.open()
        assert store.state.value == "UNINITIALIZED"

    def test_balance_mismatch(self, ledger_path):
        document = valid_document()
        document["customers"][0]["accounts"][0]["balance"] = "600"
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile, match="does not match"):
            load_customers(ledger_path)

    def test_duplicate_customer(self, ledger_path):
        document = valid_document()
        document["customers"].append(document["customers"][0])
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile, match="appears twice"):
            load_customers(ledger_path)

    def test_duplicate_account(self, ledger_path):
        document = valid_document()
        accounts = document["customers"][0]["accounts"]
        accounts.append(accounts[0])
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile, match="already exists"):
            load_customers(ledger_path)

    def test_negative_amount(self, ledger_path):
        document = valid_document()
        document["customers"][0]["accounts"][0]["transactions"][0]["amount"] = "-500"
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile):
            load_customers(ledger_path)

    def test_wrong_version(self, ledger_path):
        document = valid_document()
        document["version"] = 2
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile):
            load_customers(ledger_path)

    @pytest.mark.parametrize("changes, message", [
        ({"entry_type": "DEBIT"}, "DEPOSIT but has entry type DEBIT"),
        ({"transaction_type": "TRANSFER"}, "only transfers have a counterparty"),
        ({"counterparty_account_number": 2002}, "only transfers have a counterparty"),
        (
            {"transaction_type": "TRANSFER", "counterparty_account_number": 2001},
            "transfer to itself",
        ),
    ])
    def test_inconsistent_transaction_record(self, ledger_path, changes, message):
        document = valid_document()
        document["customers"][0]["accounts"][0]["transactions"][0].update(changes)
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile, match=message):
            load_customers(ledger_path)

    def test_withdrawal_recorded_as_credit(self, ledger_path):
        document = valid_document()
        account = document["customers"][0]["accounts"][0]
        account["balance"] = "1000"
        account["transactions"].append({
            "sequence": 2,
            "transaction_type": "WITHDRAWAL",
            "entry_type": "CREDIT",
            "amount": "500",
            "created_at": "2024-01-02T00:00:00Z",
        })
        write_document(ledger_path, document)
        with pytest.raises(CorruptLedgerFile, match="WITHDRAWAL but has entry type CREDIT"):
            load_customers(ledger_path)
