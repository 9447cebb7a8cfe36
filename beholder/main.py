#!/usr/bin/env python3
"""
Beholder LED Status Daemon - Entry Point

Usage:
    beholder-leds                       # Run the daemon (systemd)
    beholder-leds --config leds.yaml    # Use an override file
    beholder-leds --dry-run             # Print config and exit
    beholder-leds --status              # Print one frame and exit
    beholder-leds --verbose             # Enable debug logging

With no override file the daemon runs on its built-in constants.
"""

import argparse
import asyncio
import sys

from beholder import __version__
from beholder.common.config import Cell, LedConfig, find_config_path, load_led_config
from beholder.common.exceptions import BeholderError, ConfigError
from beholder.common.logging_setup import get_service_logger, reconfigure_service_loggers
from beholder.services.leds.display import PixelDisplay
from beholder.services.leds.service import Frame, LedService

logger = get_service_logger("main")


def print_startup_banner(config: LedConfig, config_path: str | None):
    """Print a summary of the configuration."""
    print()
    print("=" * 60)
    print("  BEHOLDER LED STATUS DAEMON")
    print("=" * 60)
    print()
    print(f"  Config: {config_path or 'built-in defaults'}")
    print(f"  Brightness: {config.brightness}")
    print(f"  Update interval: {config.update_interval}s")
    print(f"  Heartbeat period: {config.heartbeat_period}s")
    print(f"  Heartbeat bands: warm >= {config.temp_warm_c}C, hot >= {config.temp_hot_c}C")
    print(f"  Temperature range: {config.temp_low_c}-{config.temp_high_c}C")
    print(f"  Interfaces: {', '.join(config.interfaces)}")
    print(f"  Accelerator: {config.accelerator_name}")
    print(f"    - Probe: {' '.join(config.probe_command)}")
    print(f"    - Every {config.probe_every_ticks} ticks, timeout {config.probe_timeout}s")
    print()
    print("=" * 60)
    print()


def format_frame(frame: Frame) -> list[str]:
    """One line per cell: index, role, RGB"""
    lines = []
    for cell in Cell:
        r, g, b = frame[cell]
        lines.append(f"  [{int(cell)}] {cell.name.lower():<12} ({r:3d}, {g:3d}, {b:3d})")
    return lines


async def collect_status(config: LedConfig) -> Frame:
    """Sample and probe once without touching the strip"""
    service = LedService(config, display=_NullDisplay())
    sample = service.reader.collect()
    live = await service.probe.poll(0)

    print(f"  CPU load:     {sample.cpu_load:.0%}")
    print(f"  RAM used:     {sample.ram_used:.0%}")
    print(f"  Disk used:    {sample.disk_used:.0%}")
    print(f"  Temperature:  {sample.temperature_c:.1f}C")
    for iface, up in sample.links.items():
        print(f"  {iface + ':':<13} {'up' if up else 'down'}")
    print(f"  {config.accelerator_name + ':':<13} {'responding' if live else 'not responding'}")
    print()

    return service.compose_frame(sample, live, 0)


class _NullDisplay(PixelDisplay):
    """Strip stand-in for --status, which never renders"""

    def set_brightness(self, brightness: float) -> None:
        pass

    def set_pixel(self, index: int, r: int, g: int, b: int) -> None:
        pass

    def clear(self) -> None:
        pass

    def show(self) -> None:
        pass


async def main_async(config: LedConfig) -> None:
    """Run the daemon until SIGINT/SIGTERM"""
    logger.info(f"Starting Beholder LED daemon v{__version__}")

    service = LedService(config)
    await service.start()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Beholder LED status daemon (Blinkt!)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    beholder-leds                       # Run the daemon
    beholder-leds --config leds.yaml    # Use an override file
    beholder-leds --dry-run             # Validate config and exit
    beholder-leds --status              # Show the current frame and exit
    beholder-leds -v                    # Enable debug logging

Pixels:
    0 heartbeat  1 cpu  2 ram  3 disk  4 eth0  5 wlan0  6 accelerator  7 temp
        """
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to configuration file (default: /etc/beholder/leds.yaml if present)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and exit without starting"
    )

    parser.add_argument(
        "--status",
        action="store_true",
        help="Sample telemetry once, print the frame and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (debug) logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Beholder LED daemon v{__version__}"
    )

    args = parser.parse_args()

    if args.verbose:
        # Plain text in verbose/debug mode
        reconfigure_service_loggers("DEBUG", json_format=False)

    config_path = args.config or find_config_path()
    try:
        config = load_led_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.dry_run:
        print_startup_banner(config, config_path)
        print("Dry run mode - configuration valid")
        sys.exit(0)

    if args.status:
        frame = asyncio.run(collect_status(config))
        print("\n".join(format_frame(frame)))
        sys.exit(0)

    try:
        asyncio.run(main_async(config))
    except KeyboardInterrupt:
        print("\nStopped by user")
    except BeholderError as e:
        logger.critical(str(e))
        sys.exit(1)
    except Exception as e:
        logger.critical(f"LED daemon crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
