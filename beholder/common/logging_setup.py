"""
Structured Logging Setup

Consistent logging configuration for the daemon and the CLI.
Uses JSON format for structured logs under systemd (journald captures stderr).
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone


# Attributes every LogRecord carries; anything else arrived via extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "service"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line for journald"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", "unknown"),
            "msg": record.getMessage(),
        }
        log_data.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        )

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds service name to all logs"""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        kwargs.setdefault("extra", {})
        kwargs["extra"]["service"] = self.extra.get("service", "unknown")
        return msg, kwargs


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    json_format: bool = True,
) -> logging.Logger:
    """
    Set up structured logging for a service.

    Args:
        service_name: Name of the service (e.g., "leds", "leds.probe")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (True for production, False for dev)

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(f"beholder.{service_name}")
    logger.setLevel(numeric_level)

    # Clear existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def get_service_logger(service_name: str) -> ServiceLoggerAdapter:
    """
    Get a logger adapter with service context.

    BEHOLDER_LOG_LEVEL and BEHOLDER_LOG_FORMAT override the defaults.
    """
    log_level = os.environ.get("BEHOLDER_LOG_LEVEL", "INFO")
    json_format = os.environ.get("BEHOLDER_LOG_FORMAT", "json").lower() == "json"

    logger = setup_logging(service_name, log_level, json_format)
    return ServiceLoggerAdapter(logger, {"service": service_name})


def reconfigure_service_loggers(log_level: str, json_format: bool) -> None:
    """Re-apply level and format to every beholder.* logger created so far"""
    prefix = "beholder."
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(prefix):
            setup_logging(name[len(prefix):], log_level, json_format)


def log_liveness_change(
    logger: logging.LoggerAdapter,
    device: str,
    live: bool,
    tick: int,
) -> None:
    """Log an accelerator liveness transition"""
    if live:
        logger.info(
            f"{device} responding (tick {tick})",
            extra={"device": device, "live": live, "tick": tick},
        )
    else:
        logger.warning(
            f"{device} not responding (tick {tick})",
            extra={"device": device, "live": live, "tick": tick},
        )
