# crypto_dashboard/providers/base.py
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from ..logging_setup import get_logger
from ..models import utc_now
from ..preferences import ResolvedPreferences

logger = get_logger("crypto_dashboard.providers")


def isoformat_z(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class ProviderError(Exception):
    """Provider answered, but not with something we can use (or could not be called at all)."""


@dataclass
class SectionResult:
    data: Any
    source: str
    is_fallback: bool = False
    error_note: Optional[str] = None
    updated_at: datetime = field(default_factory=utc_now)

    def as_section(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "updatedAt": isoformat_z(self.updated_at),
            "isFallback": self.is_fallback,
            "errorNote": self.error_note,
            "source": self.source,
        }


class BaseProvider:
    """
    One external data source behind the dashboard.

    Subclasses implement ``fetch`` (may raise anything) and ``fallback``
    (must not raise). ``run`` is the only entry point the aggregator uses and
    it never raises: timeouts, transport errors, malformed payloads and
    missing credentials all end up in ``fallback``.
    """

    name = "base"
    timeout: float = 5.0

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        raise NotImplementedError

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        raise NotImplementedError

    async def run(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        t0 = time.perf_counter()
        try:
            result = await asyncio.wait_for(self.fetch(client, prefs), timeout=self.timeout)
        except asyncio.TimeoutError:
            result = self._degrade(prefs, f"{self.name} timed out after {self.timeout:g}s", "TimeoutError", t0)
        except Exception as e:
            result = self._degrade(prefs, f"{self.name} unavailable: {e}", type(e).__name__, t0)
        else:
            logger.info(
                "PROVIDER_OK",
                extra={"provider": self.name, "elapsed_ms": round((time.perf_counter() - t0) * 1000)},
            )
        # Stamp with the moment this section became ready, not the request start
        result.updated_at = utc_now()
        return result

    def _degrade(self, prefs: ResolvedPreferences, note: str, error: str, t0: float) -> SectionResult:
        logger.warning(
            f"PROVIDER_FALLBACK {self.name}: {note}",
            extra={
                "provider": self.name,
                "handled": True,
                "error": error,
                "elapsed_ms": round((time.perf_counter() - t0) * 1000),
            },
        )
        return self.fallback(prefs, note)
