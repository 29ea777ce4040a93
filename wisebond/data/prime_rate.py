"""SARB client for the South African prime lending rate."""

import logging
from decimal import Decimal, InvalidOperation

import httpx

from wisebond.config import settings

logger = logging.getLogger(__name__)


class PrimeRateClient:
    def __init__(
        self,
        url: str | None = None,
        fallback_rate: Decimal | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url or settings.prime_rate_url
        self.fallback_rate = fallback_rate if fallback_rate is not None else settings.fallback_prime_rate
        self.transport = transport

    async def _get(self) -> list | dict:
        async with httpx.AsyncClient(timeout=15.0, transport=self.transport) as client:
            resp = await client.get(self.url, headers={"Accept": "application/json"})
            resp.raise_for_status()
            return resp.json()

    @staticmethod
    def extract_prime_rate(data: list | dict) -> Decimal | None:
        """Find the prime lending rate among the SARB home-page indicators."""
        items = data if isinstance(data, list) else data.get("rates", [])
        for item in items:
            if not isinstance(item, dict):
                continue
            name = item.get("Name") or item.get("name") or ""
            if "prime" not in name.lower():
                continue
            value = item.get("Value", item.get("value"))
            try:
                return Decimal(str(value))
            except InvalidOperation:
                logger.warning("Unparseable prime rate value: %r", value)
                return None
        return None

    async def get_prime_rate(self) -> Decimal:
        """Current prime rate in percent, or the fallback if SARB is unavailable."""
        try:
            data = await self._get()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("SARB prime rate request failed, using fallback: %s", e)
            return self.fallback_rate

        rate = self.extract_prime_rate(data)
        if rate is None:
            logger.warning("Prime rate not found in SARB response, using fallback")
            return self.fallback_rate
        return rate
