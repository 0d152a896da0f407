# crypto_dashboard/lifespan.py
from contextlib import asynccontextmanager
from fastapi import FastAPI

from . import config
from .logging_setup import get_logger
from .providers.memes import MEME_CATALOG
from .store import get_session, init_db
from .users import ensure_admin

logger = get_logger("crypto_dashboard.lifespan")

@asynccontextmanager
async def lifespan(app: FastAPI):
    # ---- Startup ----
    logger.info("APP STARTUP")
    init_db()
    if config.ADMIN_EMAIL and config.ADMIN_PASSWORD:
        with get_session() as s:
            admin = ensure_admin(s, config.ADMIN_EMAIL, config.ADMIN_PASSWORD)
            logger.info(f"Admin account ready: {admin.email}")
    logger.info(f"Meme catalog ready: {len(MEME_CATALOG)} items under {config.MEME_BASE_URL}")
    for name, key in (
        ("CryptoPanic", config.CRYPTOPANIC_API_KEY),
        ("OpenRouter", config.OPENROUTER_API_KEY),
    ):
        if not key:
            logger.warning(f"{name} API key not set; that dashboard section will use local fallback content")

    # Hand control to the application
    yield

    # ---- Shutdown ----
    logger.info("APP SHUTDOWN")
