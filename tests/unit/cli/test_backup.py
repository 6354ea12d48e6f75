from __future__ import annotations

import datetime as dt
import json


def test_export_then_import(invoke, store, make_transaction, tmp_path) -> None:
    store.save_transactions([make_transaction(id="t1")])
    store.add_price("THYAO", dt.date(2024, 1, 1), 100.0)
    path = tmp_path / "backup.json"

    exported = invoke("backup", "export", str(path))
    store.clear()
    restored = invoke("backup", "import", str(path))

    assert exported.exit_code == 0, exported.stdout
    assert restored.exit_code == 0, restored.stdout
    assert set(json.loads(path.read_text(encoding="utf-8"))) == {"transactions", "stockPrices"}
    assert [t.id for t in store.load_transactions()] == ["t1"]
    assert [p.price for p in store.load_prices()["THYAO"]] == [100.0]


def test_export_refuses_empty(invoke, tmp_path) -> None:
    result = invoke("backup", "export", str(tmp_path / "backup.json"))

    assert result.exit_code == 1
    assert "No data to back up" in result.stdout


def test_invalid_backup_changes_nothing(invoke, store, make_transaction, tmp_path) -> None:
    store.save_transactions([make_transaction(id="keep")])
    path = tmp_path / "backup.json"
    path.write_text(
        json.dumps({"transactions": [], "stockPrices": {"THYAO": "bad"}}), encoding="utf-8"
    )

    result = invoke("backup", "import", str(path))

    assert result.exit_code == 1
    assert "Stock prices data is invalid" in " ".join(result.stdout.split())
    assert [t.id for t in store.load_transactions()] == ["keep"]


def test_export_rejects_non_json_path(invoke, store, make_transaction, tmp_path) -> None:
    store.save_transactions([make_transaction()])
    path = tmp_path / "backup.csv"

    result = invoke("backup", "export", str(path))

    assert result.exit_code == 1
    assert "Unsupported backup file type" in result.stdout
    assert not path.exists()
