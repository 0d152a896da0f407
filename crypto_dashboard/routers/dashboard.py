from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from ..dashboard import build_dashboard
from ..logging_setup import get_logger
from ..models import User
from ..preferences import ResolvedPreferences, resolve_preferences
from ..security import get_current_user_id
from ..store import get_session
from ..users import get_user

logger = get_logger("crypto_dashboard.routes.dashboard")

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


def _load_user_and_prefs(user_id: int) -> Tuple[User, ResolvedPreferences]:
    # Only a missing user stops the request here; provider trouble never does
    with get_session() as s:
        user = get_user(s, user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        prefs = resolve_preferences(s, user_id)
        s.expunge(user)
    return user, prefs


@router.get("")
async def get_dashboard(user_id: int = Depends(get_current_user_id)):
    user, prefs = await run_in_threadpool(_load_user_and_prefs, user_id)
    return await build_dashboard(user, prefs)
