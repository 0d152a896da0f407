# crypto_dashboard/providers/prices.py
"""
CoinGecko price adapter.

CoinGecko keys coins by its own ids ("bitcoin"), not by ticker ("BTC").
Tickers without a known id are dropped. On failure the section is an empty
coin list: prices are never fabricated.
"""
from __future__ import annotations

from typing import Dict, List, Optional

import httpx

from .. import config
from ..logging_setup import get_logger
from ..preferences import ResolvedPreferences
from .base import BaseProvider, ProviderError, SectionResult

logger = get_logger("crypto_dashboard.providers.prices")

COINGECKO_IDS: Dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "ADA": "cardano",
    "DOT": "polkadot",
    "MATIC": "polygon",
    "AVAX": "avalanche-2",
    "BNB": "binancecoin",
    "XRP": "ripple",
}
_SYMBOL_BY_ID = {v: k for k, v in COINGECKO_IDS.items()}


def map_symbols(symbols: List[str]) -> List[str]:
    ids: List[str] = []
    for sym in symbols:
        cg_id = COINGECKO_IDS.get(str(sym).strip().upper())
        if cg_id and cg_id not in ids:
            ids.append(cg_id)
    return ids


def _number(v) -> float:
    return float(v) if isinstance(v, (int, float)) else 0.0


class CoinGeckoPriceProvider(BaseProvider):
    name = "coingecko"

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.COINGECKO_API_BASE).rstrip("/")
        self.api_key = api_key if api_key is not None else config.COINGECKO_API_KEY
        self.timeout = timeout or config.PROVIDER_TIMEOUT_SECONDS

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        ids = map_symbols(prefs.interested_assets)
        if not ids:
            logger.info(f"No CoinGecko ids for assets={prefs.interested_assets}; nothing to fetch")
            return SectionResult(data=[], source=self.name)

        params = {
            "ids": ",".join(ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
            "include_7d_change": "true",
        }
        headers = {"x-cg-demo-api-key": self.api_key} if self.api_key else {}

        r = await client.get(f"{self.base_url}/simple/price", params=params, headers=headers, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        if not isinstance(body, dict):
            raise ProviderError("unexpected response format")

        coins = []
        for cg_id in ids:
            entry = body.get(cg_id)
            if not isinstance(entry, dict) or not isinstance(entry.get("usd"), (int, float)):
                logger.debug(f"Skipping {cg_id}: no usable USD price")
                continue
            coins.append({
                "id": cg_id,
                "symbol": _SYMBOL_BY_ID.get(cg_id, cg_id.upper()),
                "price": entry["usd"],
                "change24h": _number(entry.get("usd_24h_change")),
                "change7d": _number(entry.get("usd_7d_change")),
            })

        if not coins:
            raise ProviderError("no coin data in response")
        return SectionResult(data=coins, source=self.name)

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        return SectionResult(data=[], source=self.name, is_fallback=True, error_note=error_note)


class CoinGeckoTrendingProvider(BaseProvider):
    """Coins trending on CoinGecko over the last 24h; not tied to the user's assets."""

    name = "coingecko-trending"

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.COINGECKO_API_BASE).rstrip("/")
        self.api_key = api_key if api_key is not None else config.COINGECKO_API_KEY
        self.timeout = timeout or config.PROVIDER_TIMEOUT_SECONDS

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        headers = {"x-cg-demo-api-key": self.api_key} if self.api_key else {}
        r = await client.get(f"{self.base_url}/search/trending", headers=headers, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        if not isinstance(body, dict) or not isinstance(body.get("coins"), list):
            raise ProviderError("unexpected response format")

        coins = []
        for entry in body["coins"]:
            item = entry.get("item") if isinstance(entry, dict) else None
            if not isinstance(item, dict) or not item.get("id"):
                continue
            coins.append({
                "id": item["id"],
                "symbol": str(item.get("symbol") or "").upper(),
                "name": item.get("name") or item["id"],
                "marketCapRank": item.get("market_cap_rank"),
                "thumb": item.get("thumb"),
            })
        return SectionResult(data=coins, source=self.name)

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        return SectionResult(data=[], source=self.name, is_fallback=True, error_note=error_note)
