# tests/test_preferences.py
import uuid

import pytest

from crypto_dashboard.models import UserPreferences
from crypto_dashboard.preferences import (
    DEFAULT_ASSETS,
    DEFAULT_CONTENT_TYPES,
    DEFAULT_INVESTOR_TYPE,
    get_preferences,
    preferences_to_dict,
    resolve_preferences,
    save_preferences,
)
from crypto_dashboard.store import get_session
from crypto_dashboard.users import create_user


@pytest.fixture()
def user_id():
    with get_session() as s:
        u = create_user(s, f"{uuid.uuid4().hex[:8]}@example.com", "secret1", "Sat", "Oshi")
        return u.id


def _defaults():
    return (list(DEFAULT_ASSETS), list(DEFAULT_CONTENT_TYPES), DEFAULT_INVESTOR_TYPE)


def _as_tuple(p):
    return (p.interested_assets, p.content_types, p.investor_type)


def test_resolver_defaults_without_preferences(user_id):
    with get_session() as s:
        assert _as_tuple(resolve_preferences(s, user_id)) == _defaults()


def test_resolver_ignores_incomplete_onboarding(user_id):
    with get_session() as s:
        s.add(UserPreferences(
            user_id=user_id,
            interested_assets=["SOL", "ADA"],
            investor_type="Day Trader",
            content_types=["Charts"],
            completed_onboarding=False,
        ))
        s.commit()
        assert _as_tuple(resolve_preferences(s, user_id)) == _defaults()


def test_resolver_fills_missing_fields(user_id):
    with get_session() as s:
        s.add(UserPreferences(user_id=user_id, interested_assets=["sol"], completed_onboarding=True))
        s.commit()
        resolved = resolve_preferences(s, user_id)
    assert resolved.interested_assets == ["SOL"]
    assert resolved.content_types == list(DEFAULT_CONTENT_TYPES)
    assert resolved.investor_type == DEFAULT_INVESTOR_TYPE


def test_save_then_read_roundtrip(user_id):
    with get_session() as s:
        save_preferences(s, user_id, ["BTC", "SOL"], "Day Trader", ["Charts"])
    with get_session() as s:
        stored = preferences_to_dict(get_preferences(s, user_id))
        resolved = resolve_preferences(s, user_id)
    assert stored["interestedAssets"] == ["BTC", "SOL"]
    assert stored["investorType"] == "Day Trader"
    assert stored["contentTypes"] == ["Charts"]
    assert stored["completedOnboarding"] is True
    assert _as_tuple(resolved) == (["BTC", "SOL"], ["Charts"], "Day Trader")


def test_save_replaces_previous(user_id):
    with get_session() as s:
        save_preferences(s, user_id, ["BTC"], "HODLer", ["Memes"])
        save_preferences(s, user_id, ["ETH"], "Swing Trader", ["Social", "Fun"])
    with get_session() as s:
        prefs = get_preferences(s, user_id)
    assert prefs.interested_assets == ["ETH"]
    assert prefs.content_types == ["Social", "Fun"]


def test_preferences_api_roundtrip(client, auth_headers):
    body = {"interestedAssets": ["BTC", "SOL"], "investorType": "Day Trader", "contentTypes": ["Charts"]}
    r = client.post("/api/onboarding", json=body, headers=auth_headers)
    assert r.status_code == 200, r.text

    r = client.get("/api/user/preferences", headers=auth_headers)
    assert r.status_code == 200
    got = r.json()
    assert {k: got[k] for k in body} == body
    assert got["completedOnboarding"] is True


def test_preferences_api_empty_before_onboarding(client, auth_headers):
    got = client.get("/api/user/preferences", headers=auth_headers).json()
    assert got["completedOnboarding"] is False
    assert got["interestedAssets"] == []


@pytest.mark.parametrize("body, fragment", [
    ({"interestedAssets": [], "investorType": "HODLer", "contentTypes": ["Charts"]}, "at least 1"),
    ({"interestedAssets": [f"A{i}" for i in range(11)], "investorType": "HODLer", "contentTypes": ["Charts"]}, "at most 10"),
    ({"interestedAssets": ["BTC"], "investorType": "Whale", "contentTypes": ["Charts"]}, "investorType must be one of"),
    ({"interestedAssets": ["BTC"], "investorType": "HODLer", "contentTypes": ["Gossip"]}, "Invalid contentTypes: Gossip"),
])
def test_preferences_validation(client, auth_headers, body, fragment):
    r = client.put("/api/user/preferences", json=body, headers=auth_headers)
    assert r.status_code == 400
    assert any(fragment in e for e in r.json()["errors"])
