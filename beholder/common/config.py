"""
Configuration Dataclasses

Fixed daemon constants and the cell layout of the pixel strip.
Defaults are the production values; an optional YAML file may override them.
"""

from dataclasses import dataclass, field, fields
from enum import IntEnum
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .logging_setup import get_service_logger

logger = get_service_logger("config")

# Searched in order when no explicit path is given
CONFIG_SEARCH_PATHS = [
    "/etc/beholder/leds.yaml",
    "/opt/beholder/leds.yaml",
]


class Cell(IntEnum):
    """Pixel index for each telemetry role, left to right"""
    HEARTBEAT = 0
    CPU = 1
    RAM = 2
    DISK = 3
    ETH = 4
    WLAN = 5
    ACCELERATOR = 6
    TEMPERATURE = 7


NUM_CELLS = len(Cell)

NUMERIC_FIELDS = (
    "brightness", "update_interval", "heartbeat_period",
    "temp_warm_c", "temp_hot_c", "temp_low_c", "temp_high_c",
    "probe_timeout", "animation_step", "animation_pause",
)

STRING_FIELDS = (
    "accelerator_name", "loadavg_path", "meminfo_path",
    "disk_path", "net_class_dir", "thermal_path",
)


@dataclass
class LedConfig:
    """Daemon constants"""
    # Blinkt! LEDs are very bright, keep low
    brightness: float = 0.05
    update_interval: float = 1.0
    heartbeat_period: float = 2.0

    # Heartbeat color bands (degrees C)
    temp_warm_c: float = 60.0
    temp_hot_c: float = 70.0

    # Temperature cell range mapped onto 0.0-1.0
    temp_low_c: float = 30.0
    temp_high_c: float = 80.0

    # First entry renders blue, second cyan
    interfaces: list[str] = field(default_factory=lambda: ["eth0", "wlan0"])

    # Accelerator liveness probe
    accelerator_name: str = "Hailo-8L"
    probe_command: list[str] = field(
        default_factory=lambda: ["hailortcli", "fw-control", "identify"]
    )
    probe_timeout: float = 3.0
    probe_every_ticks: int = 30

    # Startup sweep
    animation_step: float = 0.08
    animation_pause: float = 0.3

    # Telemetry sources
    loadavg_path: str = "/proc/loadavg"
    meminfo_path: str = "/proc/meminfo"
    disk_path: str = "/"
    net_class_dir: str = "/sys/class/net"
    thermal_path: str = "/sys/class/thermal/thermal_zone0/temp"

    @property
    def heartbeat_period_ticks(self) -> float:
        return self.heartbeat_period / self.update_interval

    def validate(self) -> None:
        """Raise ConfigError on the first invalid value"""
        for key in NUMERIC_FIELDS:
            value = getattr(self, key)
            # bool is an int subclass; "brightness: yes" must not pass
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{key} must be a number, got {value!r}", key)
        if isinstance(self.probe_every_ticks, bool) or not isinstance(self.probe_every_ticks, int):
            raise ConfigError(
                f"probe_every_ticks must be an integer, got {self.probe_every_ticks!r}",
                "probe_every_ticks",
            )
        for key in STRING_FIELDS:
            if not isinstance(getattr(self, key), str):
                raise ConfigError(f"{key} must be a string", key)

        if not 0 < self.brightness <= 1:
            raise ConfigError(
                f"brightness must be in (0, 1], got {self.brightness}", "brightness"
            )
        for key in ("update_interval", "heartbeat_period", "probe_timeout"):
            if getattr(self, key) <= 0:
                raise ConfigError(f"{key} must be positive", key)
        for key in ("animation_step", "animation_pause"):
            if getattr(self, key) < 0:
                raise ConfigError(f"{key} cannot be negative", key)
        if self.temp_warm_c >= self.temp_hot_c:
            raise ConfigError("temp_warm_c must be below temp_hot_c", "temp_warm_c")
        if self.temp_low_c >= self.temp_high_c:
            raise ConfigError("temp_low_c must be below temp_high_c", "temp_low_c")
        if len(self.interfaces) != 2:
            raise ConfigError(
                f"exactly two interfaces required, got {len(self.interfaces)}",
                "interfaces",
            )
        if not self.probe_command:
            raise ConfigError("probe_command cannot be empty", "probe_command")
        if self.probe_every_ticks < 1:
            raise ConfigError("probe_every_ticks must be at least 1", "probe_every_ticks")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedConfig":
        """Build a config from a mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}", extra={"key": key})
                continue
            kwargs[key] = value

        for key in ("interfaces", "probe_command"):
            if key in kwargs:
                if isinstance(kwargs[key], str):
                    kwargs[key] = kwargs[key].split()
                elif isinstance(kwargs[key], (list, tuple)):
                    kwargs[key] = [str(v) for v in kwargs[key]]
                else:
                    raise ConfigError(f"{key} must be a list", key)

        config = cls(**kwargs)
        config.validate()
        return config


def find_config_path() -> str | None:
    """Return the first existing override file, if any"""
    for path in CONFIG_SEARCH_PATHS:
        if Path(path).exists():
            return path
    return None


def load_led_config(config_path: str | None = None) -> LedConfig:
    """
    Load daemon configuration.

    Args:
        config_path: Explicit YAML file. When omitted, the search paths are
            tried and a missing file means the built-in defaults.

    Returns:
        Validated LedConfig

    Raises:
        ConfigError: explicit file missing, unparsable, or invalid values
    """
    if config_path is None:
        config_path = find_config_path()
        if config_path is None:
            logger.debug("No config override found, using defaults")
            return LedConfig()
    elif not Path(config_path).exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    # Allow the settings to sit under a top-level "leds:" section
    if isinstance(data.get("leds"), dict):
        data = data["leds"]

    config = LedConfig.from_dict(data)
    logger.info(f"Loaded configuration from {config_path}")
    return config
