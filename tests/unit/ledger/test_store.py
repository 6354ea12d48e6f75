"""Unit tests for the JSON file store."""

from __future__ import annotations

import datetime as dt
import json

import pytest

from lira_portfolio.exceptions import StorageError
from lira_portfolio.ledger.store import PortfolioStore, atomic_write_json


@pytest.fixture
def store(settings) -> PortfolioStore:
    return PortfolioStore(settings)


class TestEmptyStore:
    def test_defaults(self, store):
        assert store.load_transactions() == []
        assert store.load_prices() == {}
        assert store.load_usd_try_rate() == 32.5

    def test_uses_global_settings(self, settings):
        assert PortfolioStore().data_dir == settings.data_dir


class TestTransactions:
    def test_add_and_reload(self, store, make_transaction):
        tx = make_transaction(id="t1", usd_try_rate=30.0, commission_rate=0.002)

        store.add_transaction(tx)

        assert store.load_transactions() == [tx]
        raw = json.loads(store.settings.transactions_path.read_text(encoding="utf-8"))
        assert raw["transactions"][0]["usdTryRate"] == 30.0

    def test_remove(self, store, make_transaction):
        store.save_transactions([make_transaction(id="t1"), make_transaction(id="t2")])

        assert store.remove_transaction("t1") is True
        assert store.remove_transaction("missing") is False
        assert [t.id for t in store.load_transactions()] == ["t2"]

    def test_corrupt_file(self, store):
        path = store.settings.transactions_path
        path.parent.mkdir(parents=True)
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(StorageError, match="not valid JSON"):
            store.load_transactions()

    def test_unexpected_schema(self, store):
        atomic_write_json(store.settings.transactions_path, {"items": []})

        with pytest.raises(StorageError, match="unexpected schema"):
            store.load_transactions()

    def test_invalid_record(self, store):
        atomic_write_json(store.settings.transactions_path, {"transactions": [{"id": "x"}]})

        with pytest.raises(StorageError, match="index 0"):
            store.load_transactions()


class TestPrices:
    def test_add_price_replaces_same_date_and_sorts(self, store):
        store.add_price("THYAO", dt.date(2024, 2, 1), 110.0)
        store.add_price("THYAO", dt.date(2024, 1, 1), 100.0)
        store.add_price("THYAO", dt.date(2024, 2, 1), 112.0)

        history = store.load_prices()["THYAO"]

        assert [(p.date.isoformat(), p.price) for p in history] == [
            ("2024-01-01", 100.0),
            ("2024-02-01", 112.0),
        ]

    def test_load_resorts_histories(self, store):
        atomic_write_json(
            store.settings.prices_path,
            {
                "prices": {
                    "THYAO": [
                        {"date": "2024-02-01", "price": 2},
                        {"date": "2024-01-01", "price": 1},
                    ]
                }
            },
        )

        assert [p.price for p in store.load_prices()["THYAO"]] == [1.0, 2.0]

    def test_invalid_prices_file(self, store):
        atomic_write_json(store.settings.prices_path, {"prices": {"THYAO": "nope"}})

        with pytest.raises(StorageError, match="invalid data"):
            store.load_prices()


class TestUsdTryRate:
    def test_save_and_load(self, store):
        store.save_usd_try_rate(34.25)

        assert store.load_usd_try_rate() == 34.25
        raw = json.loads(store.settings.settings_path.read_text(encoding="utf-8"))
        assert raw == {"currentUsdTryRate": 34.25}

    @pytest.mark.parametrize("rate", [0, -1])
    def test_rejects_non_positive(self, store, rate):
        with pytest.raises(ValueError, match="must be positive"):
            store.save_usd_try_rate(rate)

    def test_invalid_stored_rate(self, store):
        atomic_write_json(store.settings.settings_path, {"currentUsdTryRate": "high"})

        with pytest.raises(StorageError, match="invalid currentUsdTryRate"):
            store.load_usd_try_rate()


def test_clear_removes_everything(store, make_transaction) -> None:
    store.add_transaction(make_transaction())
    store.add_price("THYAO", dt.date(2024, 1, 1), 100.0)
    store.save_usd_try_rate(35.0)

    store.clear()

    assert store.load_transactions() == []
    assert store.load_prices() == {}
    assert store.load_usd_try_rate() == 32.5
    assert not list(store.data_dir.iterdir())


def test_atomic_write_leaves_no_temp_files(tmp_path) -> None:
    path = tmp_path / "nested" / "data.json"

    atomic_write_json(path, {"a": 1})
    atomic_write_json(path, {"a": 2})

    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 2}
    assert [p.name for p in path.parent.iterdir()] == ["data.json"]
