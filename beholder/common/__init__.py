"""
Common Utilities

Shared modules used by the daemon and the CLI:
- config.py - Cell layout, LedConfig and the YAML override loader
- exceptions.py - Custom exception classes
- logging_setup.py - Structured logging setup
"""

from .config import (
    Cell,
    NUM_CELLS,
    LedConfig,
    find_config_path,
    load_led_config,
)
from .exceptions import (
    BeholderError,
    ConfigError,
    DisplayError,
)
from .logging_setup import (
    setup_logging,
    get_service_logger,
    reconfigure_service_loggers,
    log_liveness_change,
)

__all__ = [
    # Config
    "Cell",
    "NUM_CELLS",
    "LedConfig",
    "find_config_path",
    "load_led_config",
    # Exceptions
    "BeholderError",
    "ConfigError",
    "DisplayError",
    # Logging
    "setup_logging",
    "get_service_logger",
    "reconfigure_service_loggers",
    "log_liveness_change",
]
