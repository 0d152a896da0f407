# crypto_dashboard/providers/news.py
"""
CryptoPanic news adapter.

https://cryptopanic.com/developers/api/ (/posts/ endpoint, needs an auth token).
Without a token (or on any failure) the section is filled from local templates.
"""
from __future__ import annotations

from typing import Dict, List, Optional

import httpx

from .. import config
from ..fallbacks import generate_fallback_news
from ..logging_setup import get_logger
from ..preferences import ResolvedPreferences
from .base import BaseProvider, ProviderError, SectionResult

logger = get_logger("crypto_dashboard.providers.news")

MAX_ARTICLES = 10

# Currencies CryptoPanic filters on; anything else is dropped from the query
SUPPORTED_CURRENCIES = ("BTC", "ETH", "SOL", "ADA", "DOT", "MATIC", "AVAX", "BNB", "XRP")


def map_currencies(symbols: List[str]) -> List[str]:
    out: List[str] = []
    for sym in symbols:
        code = str(sym).strip().upper()
        if code in SUPPORTED_CURRENCIES and code not in out:
            out.append(code)
    return out


def _normalize(post: Dict) -> Dict:
    if not isinstance(post, dict) or not post.get("title"):
        raise ProviderError("post without title")
    source = post.get("source") or {}
    votes = post.get("votes") or {}
    return {
        "id": post.get("id"),
        "title": post["title"],
        "url": post.get("url") or "",
        "source": (source.get("title") if isinstance(source, dict) else None) or "CryptoPanic",
        "publishedAt": post.get("published_at"),
        "votes": (votes.get("positive") if isinstance(votes, dict) else None) or 0,
        "currencies": [c.get("code") for c in (post.get("currencies") or []) if isinstance(c, dict) and c.get("code")],
    }


class CryptoPanicNewsProvider(BaseProvider):
    name = "cryptopanic"

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.CRYPTOPANIC_API_BASE).rstrip("/")
        self.api_key = api_key if api_key is not None else config.CRYPTOPANIC_API_KEY
        self.timeout = timeout or config.PROVIDER_TIMEOUT_SECONDS

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        if not self.api_key:
            raise ProviderError("CRYPTOPANIC_API_KEY not configured")

        currencies = map_currencies(prefs.interested_assets)
        if not currencies:
            logger.info(f"No CryptoPanic currencies for assets={prefs.interested_assets}; nothing to fetch")
            return SectionResult(data=[], source=self.name)

        params = {
            "auth_token": self.api_key,
            "currencies": ",".join(currencies),
            "public": "true",
            "filter": "hot",
        }
        r = await client.get(f"{self.base_url}/posts/", params=params, timeout=self.timeout)
        r.raise_for_status()
        body = r.json()
        results = body.get("results") if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise ProviderError("response has no 'results' list")

        news = [_normalize(p) for p in results[:MAX_ARTICLES]]
        return SectionResult(data=news, source=self.name)

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        return SectionResult(
            data=generate_fallback_news(prefs.interested_assets),
            source="local-templates",
            is_fallback=True,
            error_note=error_note,
        )
