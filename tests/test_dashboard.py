# tests/test_dashboard.py
import asyncio
import random
from datetime import datetime

import httpx

from crypto_dashboard.dashboard import build_dashboard
from crypto_dashboard.models import User
from crypto_dashboard.preferences import ResolvedPreferences
from crypto_dashboard.providers.base import BaseProvider, SectionResult
from crypto_dashboard.providers.memes import StaticMemeProvider
from crypto_dashboard.providers.news import CryptoPanicNewsProvider
from crypto_dashboard.providers.prices import CoinGeckoPriceProvider
from crypto_dashboard.providers.insight import OpenRouterInsightProvider

SECTIONS = {"coinPrices", "marketNews", "aiInsight", "meme"}

LIVE_COINS = [
    {"id": "bitcoin", "symbol": "BTC", "price": 65000.0, "change24h": 1.0, "change7d": 2.0},
    {"id": "ethereum", "symbol": "ETH", "price": 3200.0, "change24h": -1.0, "change7d": 0.5},
]


class _Static(BaseProvider):
    def __init__(self, name, data, delay=0.0):
        self.name, self.data, self.delay = name, data, delay

    async def fetch(self, client, prefs):
        await asyncio.sleep(self.delay)
        return SectionResult(data=self.data, source=self.name)

    def fallback(self, prefs, error_note):
        return SectionResult(data=None, source=self.name, is_fallback=True, error_note=error_note)


def _ts(s):
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _user():
    return User(id=7, email="ada@example.com", password_hash="x", first_name="Ada", last_name="Lovelace")


def _refused(request):
    raise httpx.ConnectError("connection refused", request=request)


def _build(providers, prefs=None):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(_refused)) as client:
            return await build_dashboard(_user(), prefs or ResolvedPreferences(), providers=providers, client=client)
    return asyncio.run(go())


def test_price_outage_does_not_touch_other_sections():
    providers = {
        "coinPrices": CoinGeckoPriceProvider(base_url="https://cg.test/api/v3"),
        "marketNews": _Static("news", [{"title": "live story"}]),
        "aiInsight": _Static("insight", "live insight"),
        "meme": StaticMemeProvider(rng=random.Random(0)),
    }
    out = _build(providers)

    assert SECTIONS <= set(out)
    assert out["coinPrices"]["data"] == []
    assert out["coinPrices"]["isFallback"] is True
    assert out["coinPrices"]["errorNote"]
    assert out["marketNews"]["data"] == [{"title": "live story"}]
    assert out["marketNews"]["isFallback"] is False and out["marketNews"]["errorNote"] is None
    assert out["aiInsight"]["data"] == "live insight"
    assert out["meme"]["isFallback"] is False
    assert out["user"] == {"id": 7, "email": "ada@example.com", "firstName": "Ada",
                           "lastName": "Lovelace", "score": 0, "account": "basic"}


def test_every_provider_down_still_full_envelope():
    providers = {
        "coinPrices": CoinGeckoPriceProvider(base_url="https://cg.test/api/v3"),
        "marketNews": CryptoPanicNewsProvider(base_url="https://cp.test/api/v1", api_key="k"),
        "aiInsight": OpenRouterInsightProvider(base_url="https://or.test/api/v1", api_key="k"),
        "meme": StaticMemeProvider(),
    }
    out = _build(providers, ResolvedPreferences(interested_assets=["SOL"], investor_type="Swing Trader"))

    assert SECTIONS <= set(out)
    assert out["coinPrices"]["isFallback"] and out["coinPrices"]["data"] == []
    assert out["marketNews"]["isFallback"] and 1 <= len(out["marketNews"]["data"]) <= 10
    assert out["aiInsight"]["isFallback"] and "SOL" in out["aiInsight"]["data"]
    assert out["meme"]["data"]["url"]


def test_sections_carry_their_own_completion_time():
    providers = {
        "coinPrices": _Static("fast", []),
        "marketNews": _Static("slow", [], delay=0.05),
        "aiInsight": _Static("insight", "x"),
        "meme": _Static("meme", {}),
    }
    out = _build(providers)
    assert _ts(out["marketNews"]["updatedAt"]) > _ts(out["coinPrices"]["updatedAt"])
    assert all(out[s]["updatedAt"].endswith("Z") for s in SECTIONS)


def test_providers_run_concurrently():
    providers = {name: _Static(name, [], delay=0.3) for name in SECTIONS}
    loop_time = {}

    async def go():
        t0 = asyncio.get_running_loop().time()
        async with httpx.AsyncClient(transport=httpx.MockTransport(_refused)) as client:
            await build_dashboard(_user(), ResolvedPreferences(), providers=providers, client=client)
        loop_time["elapsed"] = asyncio.get_running_loop().time() - t0

    asyncio.run(go())
    assert loop_time["elapsed"] < 1.0  # four sequential calls would take 1.2s


def test_partial_provider_map_still_yields_every_section():
    out = _build({"coinPrices": _Static("prices", LIVE_COINS), "tickerTape": _Static("extra", [])})
    assert set(out) == SECTIONS | {"user"}
    assert out["coinPrices"]["data"] == LIVE_COINS
    assert out["marketNews"]["isFallback"] is True  # no CryptoPanic key under test
    assert out["meme"]["data"]["url"]


# ---------- through the HTTP API ----------

def test_dashboard_defaults_for_new_user(client, auth_headers, mocker):
    fetch = mocker.patch.object(
        CoinGeckoPriceProvider, "fetch",
        new=mocker.AsyncMock(return_value=SectionResult(data=LIVE_COINS, source="coingecko")),
    )
    r = client.get("/api/dashboard", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()

    assert SECTIONS <= set(body)
    prefs = fetch.call_args.args[-1]
    assert prefs.interested_assets == ["BTC", "ETH"]
    assert [c["symbol"] for c in body["coinPrices"]["data"]] == ["BTC", "ETH"]
    assert len(body["marketNews"]["data"]) <= 10
    assert isinstance(body["aiInsight"]["data"], str) and body["aiInsight"]["data"]
    assert body["meme"]["data"]["url"]


def test_dashboard_survives_unreachable_providers(client, auth_headers):
    # .env.test points CoinGecko at a closed local port and leaves the other keys empty
    r = client.get("/api/dashboard", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert SECTIONS <= set(body)
    assert body["coinPrices"]["data"] == [] and body["coinPrices"]["isFallback"] is True
    assert body["marketNews"]["isFallback"] is True
    assert body["aiInsight"]["isFallback"] is True


def test_dashboard_uses_onboarded_preferences(client, auth_headers, mocker):
    fetch = mocker.patch.object(
        CoinGeckoPriceProvider, "fetch",
        new=mocker.AsyncMock(return_value=SectionResult(data=[], source="coingecko")),
    )
    client.post(
        "/api/onboarding",
        json={"interestedAssets": ["SOL", "ADA"], "investorType": "NFT Collector", "contentTypes": ["Memes"]},
        headers=auth_headers,
    )
    body = client.get("/api/dashboard", headers=auth_headers).json()
    prefs = fetch.call_args.args[-1]
    assert prefs.interested_assets == ["SOL", "ADA"]
    assert "NFT Collector" in body["aiInsight"]["data"]


def test_dashboard_user_not_found(client, mocker):
    from crypto_dashboard.security import create_access_token
    run = mocker.patch.object(CoinGeckoPriceProvider, "run")
    token = create_access_token(987654, "ghost@example.com")
    r = client.get("/api/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"
    run.assert_not_called()


def test_dashboard_lookup_runs_off_the_event_loop(client, auth_headers, mocker):
    from fastapi.concurrency import run_in_threadpool
    from crypto_dashboard.routers import dashboard as dashboard_routes

    offload = mocker.patch.object(dashboard_routes, "run_in_threadpool", wraps=run_in_threadpool)
    r = client.get("/api/dashboard", headers=auth_headers)
    assert r.status_code == 200
    assert offload.call_args.args[0] is dashboard_routes._load_user_and_prefs
