from __future__ import annotations

import datetime as dt
import json

from lira_portfolio.models import TransactionType


class TestTxAdd:
    def test_add_buy(self, invoke, store):
        result = invoke(
            "tx", "add", "thyao", "buy", "10", "250.5",
            "--date", "2024-03-01", "--rate", "31.2", "--commission", "0.002",
        )

        assert result.exit_code == 0, result.stdout
        assert "Recorded BUY 10 THYAO" in result.stdout
        [tx] = store.load_transactions()
        assert tx.ticker == "THYAO"
        assert tx.type is TransactionType.BUY
        assert tx.quantity == 10
        assert tx.price == 250.5
        assert tx.date == dt.date(2024, 3, 1)
        assert tx.usd_try_rate == 31.2
        assert tx.commission_rate == 0.002

    def test_rate_defaults_to_stored_rate(self, invoke, store):
        store.save_usd_try_rate(36.0)

        result = invoke("tx", "add", "ASELS", "SELL", "1", "60")

        assert result.exit_code == 0, result.stdout
        [tx] = store.load_transactions()
        assert tx.type is TransactionType.SELL
        assert tx.usd_try_rate == 36.0
        assert tx.date == dt.date.today()
        assert tx.commission_rate is None

    def test_rejects_non_positive_quantity(self, invoke, store):
        result = invoke("tx", "add", "THYAO", "buy", "0", "100")

        assert result.exit_code == 1
        assert "Quantity must be greater than zero" in result.stdout
        assert store.load_transactions() == []

    def test_rejects_bad_date(self, invoke):
        result = invoke("tx", "add", "THYAO", "buy", "1", "100", "--date", "01/03/2024")

        assert result.exit_code == 1
        assert "Invalid date" in result.stdout

    def test_rejects_unknown_side(self, invoke):
        result = invoke("tx", "add", "THYAO", "hold", "1", "100")

        assert result.exit_code != 0


class TestTxListRemove:
    def test_list_empty(self, invoke):
        result = invoke("tx", "list")

        assert result.exit_code == 0
        assert "No transactions found" in result.stdout

    def test_list_filters_by_ticker(self, invoke, store, make_transaction):
        store.save_transactions(
            [make_transaction(ticker="THYAO", id="a"), make_transaction(ticker="ASELS", id="b")]
        )

        result = invoke("tx", "list", "--ticker", "asels")

        assert result.exit_code == 0
        assert "ASELS" in result.stdout
        assert "THYAO" not in result.stdout

    def test_remove(self, invoke, store, make_transaction):
        store.save_transactions([make_transaction(id="abc")])

        result = invoke("tx", "remove", "abc")

        assert result.exit_code == 0
        assert store.load_transactions() == []

    def test_remove_unknown_id(self, invoke):
        result = invoke("tx", "remove", "nope")

        assert result.exit_code == 1
        assert "Transaction not found" in result.stdout


class TestTxImportExport:
    def test_import_replaces_ledger(self, invoke, store, make_transaction, tmp_path):
        store.save_transactions([make_transaction(id="old")])
        path = tmp_path / "ledger.json"
        path.write_text(
            json.dumps(
                [
                    {"id": "n1", "ticker": "THYAO", "type": "BUY", "quantity": 5,
                     "price": 100, "date": "2024-01-01"},
                    {"id": "n2", "ticker": "THYAO", "type": "SELL", "quantity": 2,
                     "price": 110, "date": "2024-02-01"},
                ]
            ),
            encoding="utf-8",
        )

        result = invoke("tx", "import", str(path))

        assert result.exit_code == 0, result.stdout
        assert "Imported 2 transaction(s)" in result.stdout
        assert [t.id for t in store.load_transactions()] == ["n1", "n2"]

    def test_import_invalid_file_keeps_ledger(self, invoke, store, make_transaction, tmp_path):
        store.save_transactions([make_transaction(id="old")])
        path = tmp_path / "ledger.json"
        path.write_text(json.dumps([{"ticker": "THYAO"}]), encoding="utf-8")

        result = invoke("tx", "import", str(path))

        assert result.exit_code == 1
        assert "Error:" in result.stdout
        assert [t.id for t in store.load_transactions()] == ["old"]

    def test_export_csv(self, invoke, store, make_transaction, tmp_path):
        store.save_transactions([make_transaction(id="t1")])
        path = tmp_path / "out.csv"

        result = invoke("tx", "export", str(path))

        assert result.exit_code == 0, result.stdout
        assert path.read_text(encoding="utf-8").startswith("id,ticker,type")

    def test_export_refuses_empty_ledger(self, invoke, tmp_path):
        path = tmp_path / "out.json"

        result = invoke("tx", "export", str(path))

        assert result.exit_code == 1
        assert "No transactions to export" in result.stdout
        assert not path.exists()
