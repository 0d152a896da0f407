import os
from dotenv import load_dotenv
from pathlib import Path

# Go up one level from crypto_dashboard/ to root/
BASE_DIR = Path(__file__).resolve().parent.parent
env_path = BASE_DIR / ".env"
load_dotenv(dotenv_path=env_path)

# Database
DB_URL = os.getenv("DB_URL", "sqlite:///crypto_dashboard.db")

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-in-production-min-32-chars")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60)))

# Bootstrap admin, created (or promoted) on startup when both are set
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "").strip().lower()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

# Providers
COINGECKO_API_BASE = os.getenv("COINGECKO_API_BASE", "https://api.coingecko.com/api/v3")
COINGECKO_API_KEY = os.getenv("COINGECKO_API_KEY", "")
CRYPTOPANIC_API_BASE = os.getenv("CRYPTOPANIC_API_BASE", "https://cryptopanic.com/api/v1")
CRYPTOPANIC_API_KEY = os.getenv("CRYPTOPANIC_API_KEY", "")
OPENROUTER_API_BASE = os.getenv("OPENROUTER_API_BASE", "https://openrouter.ai/api/v1")
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "meta-llama/llama-3.2-3b-instruct")

# Every outbound call gets a short timeout; the LLM gets a bit more room
PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "5"))
INSIGHT_TIMEOUT_SECONDS = float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "8"))

# HTTP surface
ALLOW_ORIGINS = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "http://localhost:5173").split(",") if o.strip()]
STATIC_DIR = Path(os.getenv("STATIC_DIR", BASE_DIR / "static"))
MEME_BASE_URL = os.getenv("MEME_BASE_URL", "/static/memes").rstrip("/")
