# crypto_dashboard/providers/insight.py
from __future__ import annotations

from typing import Optional

import httpx
from openai import AsyncOpenAI

from .. import config
from ..fallbacks import generate_fallback_insight, human_join
from ..logging_setup import get_logger
from ..preferences import ResolvedPreferences
from .base import BaseProvider, ProviderError, SectionResult

logger = get_logger("crypto_dashboard.providers.insight")

SYS_PROMPT = "You are a helpful crypto market analyst. Provide concise, actionable insights."


def build_prompt(prefs: ResolvedPreferences) -> str:
    return (
        f"Generate a brief (2-3 sentences) daily crypto insight for a {prefs.investor_type} investor "
        f"interested in {human_join(prefs.interested_assets)}.\n"
        f"Focus on: {', '.join(prefs.content_types)}.\n"
        "Keep it informative, concise, and relevant to today's market."
    )


class OpenRouterInsightProvider(BaseProvider):
    """
    Daily insight from an OpenAI-compatible chat endpoint (OpenRouter by default).
    The SDK shares the aggregator's httpx client and does no retries of its own.
    """

    name = "openrouter"

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url or config.OPENROUTER_API_BASE
        self.api_key = api_key if api_key is not None else config.OPENROUTER_API_KEY
        self.model = model or config.OPENROUTER_MODEL
        self.timeout = timeout or config.INSIGHT_TIMEOUT_SECONDS

    async def fetch(self, client: httpx.AsyncClient, prefs: ResolvedPreferences) -> SectionResult:
        if not self.api_key:
            raise ProviderError("OPENROUTER_API_KEY not configured")

        llm = AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            http_client=client,
            max_retries=0,
            timeout=self.timeout,
        )
        resp = await llm.chat.completions.create(
            model=self.model,
            max_tokens=150,
            messages=[
                {"role": "system", "content": SYS_PROMPT},
                {"role": "user", "content": build_prompt(prefs)},
            ],
        )
        if not resp.choices:
            raise ProviderError("completion has no choices")
        text = (resp.choices[0].message.content or "").strip()
        if not text:
            raise ProviderError("empty completion")
        return SectionResult(data=text, source=resp.model or self.model)

    def fallback(self, prefs: ResolvedPreferences, error_note: str) -> SectionResult:
        return SectionResult(
            data=generate_fallback_insight(prefs.interested_assets, prefs.investor_type, prefs.content_types),
            source="fallback",
            is_fallback=True,
            error_note=error_note,
        )
