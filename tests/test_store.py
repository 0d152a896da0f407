# tests/test_store.py
import uuid

from sqlmodel import select
from crypto_dashboard.store import get_session
from crypto_dashboard.models import Feedback, User

def test_db_roundtrip():
    with get_session() as s:
        u = User(email=f"{uuid.uuid4().hex[:8]}@example.com", password_hash="x", first_name="A", last_name="B")
        s.add(u); s.commit(); s.refresh(u)
        got = s.exec(select(User).where(User.id == u.id)).first()
        assert got and got.first_name == "A" and got.account == "basic"

def test_feedback_defaults():
    with get_session() as s:
        fb = Feedback(user_id=1, type="up", section="meme")
        s.add(fb); s.commit(); s.refresh(fb)
        assert fb.id is not None
        assert fb.content_id is None and fb.comment is None
        assert fb.created_at is not None
