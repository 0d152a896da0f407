import httpx
from fastapi import APIRouter, Depends

from ..dashboard import USER_AGENT
from ..preferences import ResolvedPreferences
from ..providers.prices import CoinGeckoTrendingProvider
from ..security import get_current_user_id

router = APIRouter(prefix="/api/coins", tags=["Coins"])


@router.get("/trending")
async def trending_coins(_: int = Depends(get_current_user_id)):
    # Same section shape as the dashboard: an outage gives an empty list with isFallback set
    async with httpx.AsyncClient(follow_redirects=True, headers={"User-Agent": USER_AGENT}) as client:
        result = await CoinGeckoTrendingProvider().run(client, ResolvedPreferences())
    return result.as_section()
