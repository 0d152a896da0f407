# tests/conftest.py
import pathlib, pytest, uuid
from dotenv import load_dotenv

# Module-level so the values are in place before any crypto_dashboard module reads its config
load_dotenv(pathlib.Path(__file__).parent / ".env.test", override=True)

@pytest.fixture(scope="session", autouse=True)
def _init_db():
    from sqlmodel import SQLModel
    from crypto_dashboard.store import engine, init_db
    init_db()
    SQLModel.metadata.drop_all(engine)
    init_db()

@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from crypto_dashboard.main import app
    return TestClient(app)

@pytest.fixture()
def signup(client):
    """Create a fresh user; returns (auth headers, signup response body)."""
    def _signup(password: str = "hunter22", **overrides):
        body = {
            "email": f"user-{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "firstName": "Ada",
            "lastName": "Lovelace",
            **overrides,
        }
        r = client.post("/api/auth/signup", json=body)
        assert r.status_code == 200, r.text
        data = r.json()
        return {"Authorization": f"Bearer {data['token']}"}, data
    return _signup

@pytest.fixture()
def auth_headers(signup):
    headers, _ = signup()
    return headers
