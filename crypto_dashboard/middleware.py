# crypto_dashboard/middleware.py
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .logging_setup import get_logger, request_id_var

logger = get_logger("crypto_dashboard.http")

# Health checks from the load balancer would drown everything else at INFO
QUIET_PATHS = {"/api/health"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its id and echoes the id back as ``X-Request-ID``."""

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        token = request_id_var.set(req_id)
        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        route = f"{request.method} {request.url.path}"

        start = time.perf_counter()
        status = 500
        try:
            logger.log(level, f"REQUEST START: {route}")
            response = await call_next(request)
            status = response.status_code
            response.headers["X-Request-ID"] = req_id
            return response
        except Exception:
            logger.exception(f"REQUEST FAILED: {route}")
            raise
        finally:
            logger.log(
                level if status < 500 else logging.ERROR,
                f"REQUEST END: {route} -> {status}",
                extra={"status_code": status, "elapsed_ms": round((time.perf_counter() - start) * 1000, 1)},
            )
            request_id_var.reset(token)
