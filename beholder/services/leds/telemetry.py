"""
Telemetry Reader

Reads host metrics for the status strip:
- CPU load (1-minute load average over core count)
- Memory usage
- Root disk usage
- Network link state
- SoC temperature

Every reader degrades to a safe default (0 / down) instead of raising,
so one missing source only affects its own pixel.
"""

import os
from dataclasses import dataclass, field

from beholder.common.config import LedConfig
from beholder.common.logging_setup import get_service_logger

logger = get_service_logger("leds.telemetry")

# Used when the CPU count cannot be determined
DEFAULT_CORES = 4


@dataclass
class TelemetrySample:
    """One tick's worth of readings"""
    cpu_load: float
    ram_used: float
    disk_used: float
    temperature_c: float
    links: dict[str, bool] = field(default_factory=dict)


def read_file(path: str) -> str:
    """Read a file, return stripped contents or empty string"""
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {path}: {e}", extra={"path": path})
        return ""


class TelemetryReader:
    """Reads /proc and /sys telemetry from the Raspberry Pi"""

    def __init__(self, config: LedConfig | None = None):
        self.config = config or LedConfig()

    def collect(self) -> TelemetrySample:
        """Collect current readings"""
        return TelemetrySample(
            cpu_load=self.get_cpu_load(),
            ram_used=self.get_ram_used(),
            disk_used=self.get_disk_used(),
            temperature_c=self.get_temperature(),
            links={iface: self.get_interface_up(iface) for iface in self.config.interfaces},
        )

    def get_cpu_load(self) -> float:
        """1-minute load average as a fraction of cores, capped at 1.0"""
        raw = read_file(self.config.loadavg_path)
        try:
            load = float(raw.split()[0])
        except (IndexError, ValueError):
            return 0.0
        cores = os.cpu_count() or DEFAULT_CORES
        return max(0.0, min(load / cores, 1.0))

    def get_ram_used(self) -> float:
        """Memory usage from MemTotal/MemAvailable as 0.0-1.0"""
        meminfo = {}
        for line in read_file(self.config.meminfo_path).splitlines():
            parts = line.split()
            if len(parts) >= 2:
                try:
                    meminfo[parts[0].rstrip(":")] = int(parts[1])
                except ValueError:
                    continue

        total = meminfo.get("MemTotal", 0)
        available = meminfo.get("MemAvailable", 0)
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - available / total))

    def get_disk_used(self) -> float:
        """Disk usage of the root filesystem as 0.0-1.0"""
        try:
            stat = os.statvfs(self.config.disk_path)
        except OSError as e:
            logger.debug(f"statvfs failed: {e}")
            return 0.0
        if stat.f_blocks == 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - stat.f_bavail / stat.f_blocks))

    def get_interface_up(self, iface: str) -> bool:
        """True when the interface reports operstate "up" """
        state = read_file(os.path.join(self.config.net_class_dir, iface, "operstate"))
        return state == "up"

    def get_temperature(self) -> float:
        """SoC temperature in Celsius, 0.0 when unreadable"""
        raw = read_file(self.config.thermal_path)
        try:
            # Temperature is in millidegrees
            return int(raw) / 1000.0
        except ValueError:
            return 0.0
