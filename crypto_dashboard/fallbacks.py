# crypto_dashboard/fallbacks.py
"""
Local stand-ins for the news and insight providers.

Everything here comes from static template tables: no network, and the
output shape is always the same. Selection and vote counts may be random;
pass ``rng`` for reproducible output.
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .models import utc_now
from .preferences import DEFAULT_ASSETS, DEFAULT_CONTENT_TYPES, DEFAULT_INVESTOR_TYPE
from .providers.base import isoformat_z

MAX_FALLBACK_ARTICLES = 10
ARTICLES_PER_ASSET = 3
FALLBACK_NEWS_URL = "https://cryptopanic.com"

# (title, source) per asset
NEWS_TEMPLATES: Dict[str, tuple] = {
    "BTC": (
        ("Bitcoin Price Analysis: Market Shows Strong Support Levels", "CryptoNews"),
        ("Institutional Investors Continue Bitcoin Accumulation", "CoinDesk"),
        ("Bitcoin Hash Rate Reaches All-Time High", "Blockchain.com"),
        ("Major Corporations Add Bitcoin to Treasury Reserves", "Forbes Crypto"),
    ),
    "ETH": (
        ("Ethereum Network Activity Reaches New Highs", "Ethereum Foundation"),
        ("DeFi Protocols on Ethereum See Increased TVL", "DeFi Pulse"),
        ("Ethereum Layer 2 Solutions Gain Traction", "Ethereum News"),
        ("NFT Market Shows Recovery Signs on Ethereum", "NFT Gators"),
    ),
    "SOL": (
        ("Solana Ecosystem Expands with New DeFi Projects", "Solana News"),
        ("Solana Network Performance Improvements Announced", "Solana Foundation"),
        ("Major DEX Launches on Solana Blockchain", "DeFi News"),
    ),
    "ADA": (
        ("Cardano Development Updates: Smart Contract Improvements", "Cardano Community"),
        ("Cardano Staking Rewards Reach New Milestone", "Cardano News"),
    ),
    "DOT": (
        ("Polkadot Parachain Auctions See High Participation", "Polkadot Network"),
        ("Cross-Chain Bridges Expand on Polkadot", "Crypto Briefing"),
    ),
    "MATIC": (
        ("Polygon Network Sees Record Transaction Volume", "Polygon News"),
        ("Major Gaming Projects Migrate to Polygon", "GameFi News"),
    ),
    "AVAX": (
        ("Avalanche Subnets Enable Custom Blockchain Solutions", "Avalanche News"),
        ("Avalanche DeFi Ecosystem Continues Growth", "DeFi Times"),
    ),
    "BNB": (
        ("BNB Chain Sees Increased Developer Activity", "BNB Chain News"),
        ("Binance Smart Chain Updates Improve Performance", "Binance Blog"),
    ),
    "XRP": (
        ("Ripple Legal Developments Impact XRP Market", "Crypto Legal"),
        ("XRP Payment Solutions Expand Globally", "Ripple News"),
    ),
}

GENERAL_NEWS = (
    ("Cryptocurrency Market Shows Bullish Momentum", "Market Watch"),
    ("Regulatory Clarity Improves for Crypto Industry", "Crypto Regulation"),
    ("Institutional Adoption of Crypto Accelerates", "Institutional Crypto"),
    ("DeFi Total Value Locked Reaches New Heights", "DeFi Analytics"),
    ("Crypto Exchanges Report Record Trading Volumes", "Exchange News"),
)

INSIGHT_TEMPLATES = (
    "As a {investor_type}, keep an eye on {assets_and}. Market conditions are dynamic, "
    "so stay informed and make decisions based on your risk tolerance.",
    "Today's crypto market shows interesting movements in {assets_and}. "
    "{investor_type}s should monitor these assets closely.",
    "For {investor_type}s interested in {assets_and}, staying updated with "
    "{content_and} content is key to making informed decisions.",
)


def human_join(items: Sequence[str]) -> str:
    """['BTC'] -> 'BTC', ['BTC','ETH'] -> 'BTC and ETH', ['A','B','C'] -> 'A, B and C'."""
    items = [str(i) for i in items]
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return f"{', '.join(items[:-1])} and {items[-1]}"


def _clean_assets(assets: Optional[Sequence[str]]) -> List[str]:
    # Deduped case-insensitively; the first spelling seen is kept
    out: Dict[str, str] = {}
    for a in assets or []:
        a = str(a).strip()
        if a:
            out.setdefault(a.upper(), a)
    return list(out.values()) or list(DEFAULT_ASSETS)


def _article(title: str, source: str, published: datetime, currencies: List[str], rng: random.Random, key: str) -> Dict:
    return {
        "id": f"fallback-{key}-{int(published.timestamp())}",
        "title": title,
        "url": FALLBACK_NEWS_URL,
        "source": source,
        "publishedAt": published,
        "votes": rng.randint(5, 54),
        "currencies": currencies,
    }


def generate_fallback_news(
    assets: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Dict]:
    """
    Up to ARTICLES_PER_ASSET template articles per asset (generic ones for
    assets without templates), topped up with general market news, deduped
    by title, capped at MAX_FALLBACK_ARTICLES and sorted newest first.
    """
    rng = rng or random.Random()
    now = now or utc_now()
    currencies = [a.upper() for a in _clean_assets(assets)]

    articles: List[Dict] = []
    seen_titles = set()

    for c_idx, currency in enumerate(currencies):
        templates = NEWS_TEMPLATES.get(currency, GENERAL_NEWS)
        for i, (title, source) in enumerate(templates[:ARTICLES_PER_ASSET]):
            if len(articles) >= MAX_FALLBACK_ARTICLES:
                break
            if title in seen_titles:
                continue
            seen_titles.add(title)
            published = now - timedelta(hours=c_idx * 2 + i)
            articles.append(_article(title, source, published, [currency], rng, f"{currency}-{i}"))

    for i, (title, source) in enumerate(GENERAL_NEWS):
        if len(articles) >= MAX_FALLBACK_ARTICLES:
            break
        if title in seen_titles:
            continue
        seen_titles.add(title)
        published = now - timedelta(hours=len(articles) + 1)
        articles.append(_article(title, source, published, list(currencies), rng, f"general-{i}"))

    articles.sort(key=lambda a: a["publishedAt"], reverse=True)
    articles = articles[:MAX_FALLBACK_ARTICLES]
    for a in articles:
        a["publishedAt"] = isoformat_z(a["publishedAt"])
    return articles


def generate_fallback_insight(
    assets: Optional[Sequence[str]] = None,
    investor_type: Optional[str] = None,
    content_types: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random.Random()
    template = rng.choice(INSIGHT_TEMPLATES)
    return template.format(
        investor_type=investor_type or DEFAULT_INVESTOR_TYPE,
        assets_and=human_join(_clean_assets(assets)),
        content_and=human_join(list(content_types or []) or list(DEFAULT_CONTENT_TYPES)),
    )
