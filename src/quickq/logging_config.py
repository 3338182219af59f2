# logging_config.py
import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

import structlog

from .config import settings

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        # Merge fields passed via extra={...}
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(name: str, level: Optional[str] = None) -> logging.Logger:
    """Set up logging configuration."""
    # Get log level from environment variable or use default
    log_level = (level or os.getenv("LOG_LEVEL") or settings.log_level).upper()

    # Get log directory from environment variable or use default
    log_dir = os.getenv("LOG_DIR", settings.log_dir)

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers
    logger.handlers = []

    formatter = JSONFormatter()

    # File logging is optional: read-only installs still get console output
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"),
            maxBytes=10485760,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        sys.stderr.write(f"File logging disabled for {name}: {e}\n")

    # Create console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Log debug message if debug logging is enabled
    if log_level == "DEBUG":
        logger.debug("Debug logging enabled")

    return logger


def get_metrics_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger for counters and timings.

    Events are rendered as ``key=value`` pairs and routed through the same
    handlers as :func:`setup_logging`, so they land in ``<name>.metrics.log``.
    """
    base = setup_logging(f"{name}.metrics")
    # The module logger already writes to stdout; do not print each event twice
    base.propagate = False
    return structlog.wrap_logger(
        base,
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
