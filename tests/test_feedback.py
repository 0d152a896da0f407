# tests/test_feedback.py
import pytest


def _post(client, headers, **body):
    return client.post("/api/feedback", json={"type": "up", "section": "meme", **body}, headers=headers)


def test_feedback_saved(client, auth_headers):
    r = _post(client, auth_headers, section="aiInsight", type="down", contentId="insight-1", comment="too vague")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Feedback saved successfully"
    fb = body["feedback"]
    assert fb["id"] and fb["userId"]
    assert (fb["type"], fb["section"], fb["contentId"], fb["comment"]) == ("down", "aiInsight", "insight-1", "too vague")


def test_feedback_unknown_section(client, auth_headers):
    r = _post(client, auth_headers, section="bogusSection")
    assert r.status_code == 400
    msg = " ".join(r.json()["errors"])
    for name in ("coinPrices", "marketNews", "aiInsight", "meme"):
        assert name in msg


@pytest.mark.parametrize("length, ok", [(500, True), (501, False)])
def test_feedback_comment_length(client, auth_headers, length, ok):
    r = _post(client, auth_headers, comment="x" * length)
    assert (r.status_code == 200) is ok
    if not ok:
        assert r.status_code == 400
        assert any("at most 500" in e for e in r.json()["errors"])


def test_feedback_unknown_type(client, auth_headers):
    r = _post(client, auth_headers, type="sideways")
    assert r.status_code == 400
    assert r.json()["detail"] == "Validation failed"


def test_feedback_list_is_per_user_newest_first(client, signup):
    mine, _ = signup()
    theirs, _ = signup()
    _post(client, mine, section="coinPrices")
    _post(client, theirs, section="marketNews")
    _post(client, mine, section="meme", type="down")

    r = client.get("/api/feedback", headers=mine)
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    assert [f["section"] for f in body["feedback"]] == ["meme", "coinPrices"]


def test_feedback_requires_token(client):
    r = client.post("/api/feedback", json={"type": "up", "section": "meme"})
    assert r.status_code == 401
