# crypto_dashboard/dashboard.py
from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import httpx

from .logging_setup import get_logger
from .models import User
from .preferences import ResolvedPreferences
from .providers.base import BaseProvider
from .providers.insight import OpenRouterInsightProvider
from .providers.memes import StaticMemeProvider
from .providers.news import CryptoPanicNewsProvider
from .providers.prices import CoinGeckoPriceProvider
from .schema import DASHBOARD_SECTIONS
from .users import user_summary

logger = get_logger("crypto_dashboard.dashboard")

USER_AGENT = "CryptoDashboard/1.0"


def default_providers() -> Dict[str, BaseProvider]:
    """Section name -> provider, built from current config."""
    return {
        "coinPrices": CoinGeckoPriceProvider(),
        "marketNews": CryptoPanicNewsProvider(),
        "aiInsight": OpenRouterInsightProvider(),
        "meme": StaticMemeProvider(),
    }


async def build_dashboard(
    user: User,
    prefs: ResolvedPreferences,
    providers: Optional[Dict[str, BaseProvider]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """
    Fan out to every provider at once and merge the results:
    - each provider is bounded by its own timeout and degrades on its own
    - all of them are awaited; there is no early return
    - the envelope always has every section, live or fallback
    """
    # Missing sections get their default provider; unknown keys are dropped
    defaults = default_providers()
    providers = {name: (providers or {}).get(name) or defaults[name] for name in DASHBOARD_SECTIONS}
    t0 = time.perf_counter()

    def X(**fields):
        # Helper to attach correlation + common fields
        return {"user_id": user.id, **fields}

    logger.info("DASHBOARD_START", extra=X(assets=prefs.interested_assets, investor_type=prefs.investor_type))

    async def _gather(http: httpx.AsyncClient):
        return await asyncio.gather(*(p.run(http, prefs) for p in providers.values()))

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, headers={"User-Agent": USER_AGENT}) as http:
            results = await _gather(http)
    else:
        results = await _gather(client)

    sections = dict(zip(providers.keys(), results))
    fallbacks = [name for name, res in sections.items() if res.is_fallback]

    logger.info(
        "DASHBOARD_READY",
        extra=X(
            fallback_sections=fallbacks,
            total_elapsed_ms=round((time.perf_counter() - t0) * 1000),
        ),
    )

    response: Dict[str, Any] = {"user": user_summary(user)}
    response.update({name: res.as_section() for name, res in sections.items()})
    return response
