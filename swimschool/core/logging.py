# swimschool/core/logging.py
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from swimschool.core.config import settings

_CONFIGURED = False

class JSONFormatter(logging.Formatter):
    """Uma linha JSON por registro (para agregadores de log)."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)

def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_JSON if json_output is None else json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    root.addHandler(handler)

    # sqlalchemy é verboso demais em INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _CONFIGURED = True
