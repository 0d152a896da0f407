# crypto_dashboard/providers/memes.py
"""
Meme of the day from a static, locally hosted catalog.

The catalog is a read-only table loaded with the module. Picking is a pure
in-memory lookup, so this provider has nothing to degrade from.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

import httpx

from .. import config
from ..preferences import ResolvedPreferences
from .base import BaseProvider, SectionResult

MEME_CATALOG = (
    {"id": "meme-1", "file": "hodl-strong.jpg", "title": "HODL Strong",
     "description": "When the chart bleeds red and you just hold tighter.", "tags": ("BTC",)},
    {"id": "meme-2", "file": "when-bitcoin-dips.jpg", "title": "When Bitcoin Dips",
     "description": "Everyone is a long-term investor until the first 10% drop.", "tags": ("BTC",)},
    {"id": "meme-3", "file": "diamond-hands.jpg", "title": "Diamond Hands",
     "description": "Paper hands sold the bottom. Again.", "tags": ()},
    {"id": "meme-4", "file": "to-the-moon.jpg", "title": "To the Moon",
     "description": "Next stop: the moon. Or the basement. Same rocket.", "tags": ("DOGE", "SOL")},
    {"id": "meme-5", "file": "crypto-life.jpg", "title": "Crypto Life",
     "description": "Checking prices at 3am is a lifestyle.", "tags": ()},
    {"id": "meme-6", "file": "gas-fees.jpg", "title": "Gas Fees",
     "description": "Sent $5 of ETH, paid $40 in gas.", "tags": ("ETH",)},
    {"id": "meme-7", "file": "merge-complete.jpg", "title": "Merge Complete",
     "description": "Proof of stake, proof of patience.", "tags": ("ETH",)},
    {"id": "meme-8", "file": "validator-uptime.jpg", "title": "Validator Uptime",
     "description": "The network stayed up longer than my conviction.", "tags": ("SOL", "ADA", "DOT")},
)


def meme_item(entry: Dict) -> Dict:
    return {
        "id": entry["id"],
        "url": f"{config.MEME_BASE_URL}/{entry['file']}",
        "title": entry["title"],
        "description": entry["description"],
        "source": "local",
        "tags": list(entry["tags"]),
    }


def all_memes() -> List[Dict]:
    return [meme_item(m) for m in MEME_CATALOG]


def pick_meme(assets: Optional[Sequence[str]] = None, rng: Optional[random.Random] = None) -> Dict:
    """One meme, preferring those tagged with any of ``assets``."""
    rng = rng or random.Random()
    wanted = {str(a).strip().upper() for a in (assets or [])}
    tagged = [m for m in MEME_CATALOG if wanted.intersection(m["tags"])]
    return meme_item(rng.choice(tagged or MEME_CATALOG))


class StaticMemeProvider(BaseProvider):
    name = "local-memes"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        return SectionResult(data=pick_meme(prefs.interested_assets, self.rng), source=self.name)

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        return SectionResult(data=meme_item(MEME_CATALOG[0]), source=self.name, is_fallback=True, error_note=error_note)
