"""
logging_config.py - JSON Logging Configuration

PURPOSE:
    Structured JSON logging for the cart store and its HTTP service, with
    timezone-aware timestamps and service context on every record.

JSON LOG FIELDS:
    - timestamp: ISO 8601 in the configured timezone
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module where the log originated (e.g. "cart_store.store")
    - message: The log message
    - service_name: Injected by setup_logging
    - correlation_id: Optional, passed via `extra`
    - event_type: Optional cart event name, e.g. "cart.item_added"
    - exception: Stack trace, when exc_info is set

USAGE:
    from cart_store.logging_config import setup_logging
    setup_logging("cart-service", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Added 1 x variant 7 to cart", extra={"event_type": "cart.item_added"})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-02-23T22:48:51.001014+00:00",
        "level": "INFO",
        "logger": "cart_store.store",
        "message": "Added 1 x variant 7 to cart",
        "service_name": "cart-service",
        "event_type": "cart.item_added"
    }
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict
from zoneinfo import ZoneInfo


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs with correlation context."""

    def __init__(self, timezone_name: str = "UTC"):
        super().__init__()
        self.tz = ZoneInfo(timezone_name)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, self.tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "service_name"):
            log_data["service_name"] = record.service_name
        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id
        if hasattr(record, "event_type"):
            log_data["event_type"] = record.event_type

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ServiceFilter(logging.Filter):
    """Stamp every record with the service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO", timezone_name: str = "UTC") -> None:
    """Setup JSON logging on the root logger. Calling it again replaces the previous setup."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(timezone_name))
    # Filter on the handler so records from child loggers are stamped too.
    handler.addFilter(ServiceFilter(service_name))

    logger = logging.getLogger()
    logger.setLevel(level)

    for existing in list(logger.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            logger.removeHandler(existing)

    logger.addHandler(handler)
