from fastapi import APIRouter, Depends, HTTPException, status

from ..logging_setup import get_logger
from ..preferences import get_preferences, preferences_to_dict, save_preferences
from ..schema import PreferencesIn
from ..security import get_current_user_id
from ..store import get_session
from ..users import get_user

logger = get_logger("crypto_dashboard.routes.prefs")

router = APIRouter(prefix="/api", tags=["Preferences"])


def _save(user_id: int, body: PreferencesIn) -> dict:
    with get_session() as s:
        if get_user(s, user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        prefs = save_preferences(
            s,
            user_id,
            interested_assets=body.interestedAssets,
            investor_type=body.investorType,
            content_types=body.contentTypes,
        )
        return {"message": "Preferences saved successfully", "preferences": preferences_to_dict(prefs)}


@router.get("/user/preferences")
def read_preferences(user_id: int = Depends(get_current_user_id)):
    with get_session() as s:
        return preferences_to_dict(get_preferences(s, user_id))


@router.post("/onboarding")
def complete_onboarding(body: PreferencesIn, user_id: int = Depends(get_current_user_id)):
    logger.info(f"Onboarding submitted: user={user_id}")
    return _save(user_id, body)


@router.put("/user/preferences")
def update_preferences(body: PreferencesIn, user_id: int = Depends(get_current_user_id)):
    logger.info(f"Updating preferences: user={user_id}")
    return _save(user_id, body)
