# crypto_dashboard/exception_handling.py
from __future__ import annotations

from typing import List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logging_setup import get_logger

# Keep a separate logger namespace for exceptions
logger = get_logger("crypto_dashboard.exceptions")


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    out: List[str] = []
    for err in exc.errors():
        # loc looks like ("body", "section"); the "body" prefix is noise for clients
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return out


async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning(
        "HTTP_EXCEPTION",
        extra={"handled": True, "path": str(request.url.path), "status_code": exc.status_code},
    )
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = _format_validation_errors(exc)
    logger.info(
        "VALIDATION_FAILED",
        extra={"handled": True, "path": str(request.url.path), "errors": errors},
    )
    return JSONResponse({"detail": "Validation failed", "errors": errors}, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "UNHANDLED_EXCEPTION",
        extra={"handled": False, "path": str(request.url.path)},
    )
    return JSONResponse({"detail": "Internal Server Error"}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers in one place.
    Call from crypto_dashboard/main.py after creating the FastAPI app.
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
