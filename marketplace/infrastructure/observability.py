"""Structured Logging - JSON formatter and setup for production observability.

Invariants:
    - Every line carries the record's own timestamp, level, logger name and message
    - Marketplace context (user_id, item_id, folder_id, price, error_code, path) surfaced when present
    - setup_logging is idempotent: calling it again replaces its handler instead of stacking another
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "user_id", "item_id", "folder_id", "price", "error_code", "path",
)
_HANDLER_NAME = "marketplace"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the root handler; `fmt` is "json" or anything else for plain text."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays opt-in even at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
