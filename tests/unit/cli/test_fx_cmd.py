from __future__ import annotations

import respx
from httpx import Response

LATEST_USD_URL = "https://open.er-api.com/v6/latest/USD"


def test_show_default_rate(invoke) -> None:
    result = invoke("fx", "show")

    assert result.exit_code == 0
    assert "USD/TRY: 32.5" in result.stdout


def test_set_rate(invoke, store) -> None:
    result = invoke("fx", "set", "34.75")

    assert result.exit_code == 0
    assert store.load_usd_try_rate() == 34.75


def test_set_rejects_zero(invoke, store) -> None:
    result = invoke("fx", "set", "0")

    assert result.exit_code == 1
    assert "must be greater than zero" in result.stdout
    assert store.load_usd_try_rate() == 32.5


@respx.mock
def test_fetch_stores_rate(invoke, store) -> None:
    respx.get(LATEST_USD_URL).mock(
        return_value=Response(200, json={"result": "success", "rates": {"TRY": 33.1}})
    )

    result = invoke("fx", "fetch")

    assert result.exit_code == 0, result.stdout
    assert "USD/TRY: 33.1" in result.stdout
    assert store.load_usd_try_rate() == 33.1


@respx.mock
def test_fetch_dry_run_does_not_store(invoke, store) -> None:
    respx.get(LATEST_USD_URL).mock(
        return_value=Response(200, json={"result": "success", "rates": {"TRY": 33.1}})
    )

    result = invoke("fx", "fetch", "--dry-run")

    assert result.exit_code == 0
    assert "not saved" in result.stdout
    assert store.load_usd_try_rate() == 32.5


@respx.mock
def test_fetch_api_error(invoke, store) -> None:
    respx.get(LATEST_USD_URL).mock(
        return_value=Response(200, json={"result": "error", "error-type": "quota-reached"})
    )

    result = invoke("fx", "fetch")

    assert result.exit_code == 1
    assert "quota-reached" in result.stdout
    assert store.load_usd_try_rate() == 32.5
