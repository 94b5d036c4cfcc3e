"""
Application logging.
Configures a single correlation-aware logger plus a structured audit channel.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from debtfree.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Guarantees every record carries a correlation_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def _build_logger(name: str) -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(CorrelationIdFilter())
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    log.propagate = False
    return log


logger = _build_logger("debtfree")
_audit_logger = _build_logger("debtfree.audit")


def get_logger_with_correlation(correlation_id: str) -> logging.LoggerAdapter:
    """Returns a logger that stamps the given correlation id on every record."""
    return logging.LoggerAdapter(logger, {"correlation_id": correlation_id})


def audit_log(
    action: str,
    user: str,
    resource: str,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """
    Emits a single JSON line describing an auditable action.
    The payload is kept flat so log shippers can index it without parsing.
    """
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "user": user,
        "resource": resource,
        "details": details or {},
    }
    correlation_id = entry["details"].get("correlation_id", "-")
    _audit_logger.info(json.dumps(entry, default=str), extra={"correlation_id": correlation_id})
