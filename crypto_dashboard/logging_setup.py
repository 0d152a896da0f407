# crypto_dashboard/logging_setup.py
import contextvars
import logging
import os
from logging.config import dictConfig
from pathlib import Path

# Set per request by RequestContextMiddleware
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")

LOG_DIR = Path(os.getenv("LOG_DIR", Path(__file__).resolve().parents[1] / "logs"))
LOG_FILE = LOG_DIR / "crypto_dashboard.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord has; anything else arrived through ``extra=``
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id", "user_id"}


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        # user_id only shows when the event passes it in extra
        record.user_id = getattr(record, "user_id", "-")
        return True


class EventFormatter(logging.Formatter):
    """Appends ``extra`` fields as key=value so PROVIDER_* / DASHBOARD_* events stay greppable."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return line


def setup_logging() -> Path:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    fmt = "%(asctime)s | %(levelname)s | %(name)s | req=%(request_id)s user=%(user_id)s | %(message)s"
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"context": {"()": RequestContextFilter}},
        "formatters": {
            "event": {"()": EventFormatter, "fmt": fmt},
            "plain": {"format": "%(asctime)s | %(levelname)s | %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "event",
                "filters": ["context"],
            },
            "file": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "formatter": "event",
                "filters": ["context"],
                "filename": str(LOG_FILE),
                "when": "midnight",
                "backupCount": 14,
                "encoding": "utf-8",
            },
            "server": {"class": "logging.StreamHandler", "formatter": "plain"},
        },
        "loggers": {
            "crypto_dashboard": {"handlers": ["console", "file"], "level": LOG_LEVEL, "propagate": False},
            # Provider calls are logged by the adapters; the client libraries only add noise
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
            "openai": {"level": "WARNING"},
            "uvicorn.error": {"handlers": ["server", "file"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["server"], "level": "INFO", "propagate": False},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })

    logging.getLogger("crypto_dashboard").info(f"Logging to: {LOG_FILE}")
    return LOG_FILE


def get_logger(name: str = "crypto_dashboard") -> logging.Logger:
    return logging.getLogger(name)
