# crypto_dashboard/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import config
from .logging_setup import setup_logging, get_logger
from .middleware import RequestContextMiddleware
from .exception_handling import register_exception_handlers
from .lifespan import lifespan

from .routers import auth, coins, dashboard, feedback, health, memes, prefs, profile, users


setup_logging()  # <-- set up logging ASAP
logger = get_logger("crypto_dashboard.main")

app = FastAPI(title="Crypto Dashboard API", version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

# Meme images are served from here when the directory is deployed alongside the API
if config.STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")
else:
    logger.info(f"No static dir at {config.STATIC_DIR}; meme images must be hosted elsewhere")

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(prefs.router)
app.include_router(dashboard.router)
app.include_router(feedback.router)
app.include_router(memes.router)
app.include_router(coins.router)
# Last: its /api/user/{id} routes sit beside /api/user/me and /api/user/preferences
app.include_router(users.router)
