"""Exchange-rate client for the current USD/TRY rate (open.er-api.com)."""

from __future__ import annotations

import math
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lira_portfolio.config import get_settings
from lira_portfolio.constants import FX_MAX_RETRIES, FX_TIMEOUT_SECONDS
from lira_portfolio.exceptions import ExchangeRateError

logger = structlog.get_logger()

_RETRY_WAIT = wait_exponential(multiplier=1, min=1, max=10)


class ExchangeRateClient:
    """
    Fetch the latest USD-based exchange rates.

    Usage:
        async with ExchangeRateClient() as client:
            rate = await client.get_usd_try_rate()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = FX_TIMEOUT_SECONDS,
        max_retries: int = FX_MAX_RETRIES,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or get_settings().fx_base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._max_retries = max_retries

    async def __aenter__(self) -> ExchangeRateClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _get(self, path: str) -> dict[str, Any]:
        """GET with retry on network errors and timeouts."""
        try:
            return await self._get_with_retry(path)
        except (httpx.NetworkError, httpx.TimeoutException) as e:
            raise ExchangeRateError(f"Exchange rate request failed: {e}") from e

    async def _get_with_retry(self, path: str) -> dict[str, Any]:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
            stop=stop_after_attempt(self._max_retries),
            wait=_RETRY_WAIT,
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(path)
                if response.status_code >= 400:
                    raise ExchangeRateError(
                        response.text or response.reason_phrase,
                        status_code=response.status_code,
                    )
                try:
                    payload = response.json()
                except ValueError:
                    raise ExchangeRateError("Exchange rate API returned invalid JSON") from None
                if not isinstance(payload, dict):
                    raise ExchangeRateError("Invalid API response format.")
                return payload

        raise AssertionError("AsyncRetrying should have returned or raised")  # pragma: no cover

    async def get_latest_rates(self, base: str = "USD") -> dict[str, float]:
        """
        Latest rates for a base currency (units of each currency per one `base`).

        Raises:
            ExchangeRateError: On HTTP errors or an unsuccessful API result.
        """
        payload = await self._get(f"/latest/{base}")
        if payload.get("result") != "success":
            error_type = payload.get("error-type") or "Invalid API response format."
            raise ExchangeRateError(str(error_type))

        rates = payload.get("rates")
        if not isinstance(rates, dict):
            raise ExchangeRateError("Invalid API response format.")
        return rates

    async def get_usd_try_rate(self) -> float:
        """
        Current TRY per USD.

        Raises:
            ExchangeRateError: If the fetch fails or the response has no usable TRY rate.
        """
        rates = await self.get_latest_rates("USD")
        rate = rates.get("TRY")
        if isinstance(rate, bool) or not isinstance(rate, int | float):
            raise ExchangeRateError("Invalid API response format.")
        if not math.isfinite(rate) or rate <= 0:
            raise ExchangeRateError(f"Exchange rate API returned an unusable rate: {rate}")

        logger.info("Fetched USD/TRY rate", rate=rate)
        return float(rate)
