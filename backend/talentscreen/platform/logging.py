import logging
import sys
import json
from datetime import datetime, timezone

from .config import settings
from .request_context import get_request_id

# ``extra=`` keys copied into the JSON payload when present
CONTEXT_FIELDS = ("assessment_id", "candidate_id", "user_id", "provider")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", None) or get_request_id()
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if request_id:
            payload["request_id"] = request_id
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or settings.LOG_LEVEL or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Send JSON lines to stdout from the root logger; ``LOG_LEVEL`` when no level is given."""
    log_level = _resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    # Silence noisy loggers
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "httpx", "openai", "anthropic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger
