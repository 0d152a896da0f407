# crypto_dashboard/preferences.py
"""
Preference storage and resolution.

Stored preferences only become "live" once onboarding is completed. Until
then (or when nothing is stored) the dashboard runs on system defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlmodel import Session, select

from .logging_setup import get_logger
from .models import UserPreferences, utc_now

logger = get_logger("crypto_dashboard.preferences")

VALID_INVESTOR_TYPES = ("HODLer", "Day Trader", "NFT Collector", "DeFi Enthusiast", "Swing Trader")
VALID_CONTENT_TYPES = ("Market News", "Charts", "Social", "Fun", "Technical Analysis", "Memes")

MAX_ASSETS = 10
MAX_CONTENT_TYPES = 6

DEFAULT_ASSETS = ("BTC", "ETH")
DEFAULT_CONTENT_TYPES = ("Market News",)
DEFAULT_INVESTOR_TYPE = "HODLer"


@dataclass
class ResolvedPreferences:
    interested_assets: List[str] = field(default_factory=lambda: list(DEFAULT_ASSETS))
    content_types: List[str] = field(default_factory=lambda: list(DEFAULT_CONTENT_TYPES))
    investor_type: str = DEFAULT_INVESTOR_TYPE

    def as_dict(self) -> Dict[str, Any]:
        return {
            "interestedAssets": list(self.interested_assets),
            "contentTypes": list(self.content_types),
            "investorType": self.investor_type,
        }


def normalize_assets(assets: Optional[Sequence[str]]) -> List[str]:
    """Uppercase, strip, drop blanks and duplicates, keep order."""
    out: List[str] = []
    for a in assets or []:
        sym = str(a).strip().upper()
        if sym and sym not in out:
            out.append(sym)
    return out


def get_preferences(session: Session, user_id: int) -> Optional[UserPreferences]:
    return session.exec(select(UserPreferences).where(UserPreferences.user_id == user_id)).first()


def resolve_preferences(session: Session, user_id: int) -> ResolvedPreferences:
    prefs = get_preferences(session, user_id)
    if prefs is None or not prefs.completed_onboarding:
        logger.debug(f"Using default preferences for user={user_id}")
        return ResolvedPreferences()

    assets = normalize_assets(prefs.interested_assets)[:MAX_ASSETS]
    return ResolvedPreferences(
        interested_assets=assets or list(DEFAULT_ASSETS),
        content_types=list(prefs.content_types or []) or list(DEFAULT_CONTENT_TYPES),
        investor_type=prefs.investor_type or DEFAULT_INVESTOR_TYPE,
    )


def save_preferences(
    session: Session,
    user_id: int,
    interested_assets: Sequence[str],
    investor_type: str,
    content_types: Sequence[str],
) -> UserPreferences:
    """Create or replace the user's preferences and mark onboarding as completed."""
    prefs = get_preferences(session, user_id) or UserPreferences(user_id=user_id)
    prefs.interested_assets = normalize_assets(interested_assets)
    prefs.investor_type = investor_type
    prefs.content_types = list(dict.fromkeys(content_types))
    prefs.completed_onboarding = True
    prefs.updated_at = utc_now()
    session.add(prefs)
    session.commit()
    session.refresh(prefs)
    logger.info(
        "PREFERENCES_SAVED",
        extra={"user_id": user_id, "assets": prefs.interested_assets, "investor_type": investor_type},
    )
    return prefs


def preferences_to_dict(prefs: Optional[UserPreferences]) -> Dict[str, Any]:
    if prefs is None:
        return {
            "interestedAssets": [],
            "investorType": None,
            "contentTypes": [],
            "completedOnboarding": False,
            "updatedAt": None,
        }
    return {
        "interestedAssets": list(prefs.interested_assets or []),
        "investorType": prefs.investor_type,
        "contentTypes": list(prefs.content_types or []),
        "completedOnboarding": prefs.completed_onboarding,
        "updatedAt": prefs.updated_at.isoformat() if prefs.updated_at else None,
    }
