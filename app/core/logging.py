# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging.

Every record becomes one JSON line. Ids passed through ``extra=`` (see
``family_context``) are lifted into top-level keys so a single family,
task or member can be traced across requests.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings

CONTEXT_FIELDS = ("request_id", "family_id", "task_id", "member_id", "recipient")


def family_context(family_id: str, task_id: Optional[str] = None,
                   member_id: Optional[str] = None, **fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a log call about one family."""
    context = {"family_id": family_id, "task_id": task_id, "member_id": member_id, **fields}
    return {k: v for k, v in context.items() if v is not None}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
            entry["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(entry)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
    logger.propagate = False
    return logger
