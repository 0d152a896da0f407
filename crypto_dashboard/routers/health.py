from fastapi import APIRouter
from ..logging_setup import get_logger

logger = get_logger("crypto_dashboard.routes.health")

router = APIRouter(prefix="/api")

@router.get("/health")
def health():
    logger.debug("Health check invoked")
    return {"status": "ok"}
