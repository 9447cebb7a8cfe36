"""
LED Status Service

Drives the 8-pixel strip from host telemetry, once per second:

  [0] Heartbeat     - pulse, green=ok, yellow=warm, red=hot
  [1] CPU load      - green -> yellow -> red
  [2] RAM usage     - green -> yellow -> red
  [3] Disk usage    - green -> yellow -> red
  [4] eth0          - blue=up, off=down
  [5] wlan0         - cyan=up, off=down
  [6] Accelerator   - magenta=responding, dim purple=idle/missing
  [7] Temperature   - green -> yellow -> red over 30-80 C

This service runs as a systemd service with Restart=always. The only
way it stops is SIGINT/SIGTERM, which clears the strip before exit.
"""

import asyncio
import signal

from beholder.common.config import Cell, LedConfig
from beholder.common.logging_setup import get_service_logger

from .colors import (
    ETH_UP,
    OFF,
    RGB,
    SWEEP,
    WLAN_UP,
    accelerator_color,
    heartbeat_color,
    heartbeat_intensity,
    link_color,
    load_to_rgb,
    temperature_fraction,
)
from .display import BlinktDisplay, PixelDisplay
from .probe import AcceleratorProbe
from .telemetry import TelemetryReader, TelemetrySample

logger = get_service_logger("leds")

Frame = dict[Cell, RGB]


class LedService:
    """
    LED Status Service

    Owns all daemon state: the display, the tick counter and the
    cached accelerator liveness (inside the probe).
    """

    def __init__(
        self,
        config: LedConfig | None = None,
        display: PixelDisplay | None = None,
        reader: TelemetryReader | None = None,
        probe: AcceleratorProbe | None = None,
    ):
        self.config = config or LedConfig()
        self.display = display if display is not None else BlinktDisplay()
        self.reader = reader or TelemetryReader(self.config)
        self.probe = probe or AcceleratorProbe(
            command=self.config.probe_command,
            timeout=self.config.probe_timeout,
            every_ticks=self.config.probe_every_ticks,
            name=self.config.accelerator_name,
        )

        self.tick = 0
        self.failed_ticks = 0
        self.last_frame: Frame | None = None

        self._task: asyncio.Task | None = None
        self._shutdown_event = asyncio.Event()
        self._signals_installed: list[signal.Signals] = []
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self, install_signal_handlers: bool = True) -> None:
        """Run until shutdown is requested, then clear the strip"""
        logger.info(
            "Starting LED status service",
            extra={
                "brightness": self.config.brightness,
                "interval": self.config.update_interval,
                "interfaces": self.config.interfaces,
            },
        )
        self._is_running = True

        if install_signal_handlers:
            self._setup_signal_handlers()

        try:
            self._task = asyncio.create_task(self._run())
            await self._task
        except asyncio.CancelledError:
            if not self._shutdown_event.is_set():
                raise
        finally:
            self._clear_display()
            self._remove_signal_handlers()
            self._is_running = False
            logger.info(
                "LED status service stopped",
                extra={"ticks": self.tick, "failed_ticks": self.failed_ticks},
            )

    def request_shutdown(self) -> None:
        """Stop the render loop, interrupting a sleep or probe in progress"""
        logger.info("Received shutdown signal")
        self._shutdown_event.set()
        if self._task and not self._task.done():
            self._task.cancel()

    async def _run(self) -> None:
        await self._startup()

        while not self._shutdown_event.is_set():
            try:
                self.last_frame = await self.render_tick()
            except Exception as e:
                # Don't crash the daemon on transient errors
                self.failed_ticks += 1
                logger.warning(
                    f"Tick {self.tick} failed: {e}",
                    extra={"tick": self.tick, "error": str(e)},
                )
            self.tick += 1
            await self._sleep(self.config.update_interval)

    async def _startup(self) -> None:
        self.display.set_brightness(self.config.brightness)
        self.display.clear()
        try:
            await self._startup_animation()
        except Exception as e:
            logger.warning(f"Startup animation failed: {e}")

    async def _startup_animation(self) -> None:
        """Sweep a single pixel left to right, then back"""
        n = self.display.num_pixels
        for i in list(range(n)) + list(range(n - 1, -1, -1)):
            self.display.clear()
            self.display.set_pixel(i, *SWEEP)
            self.display.show()
            await asyncio.sleep(self.config.animation_step)
        self.display.clear()
        self.display.show()
        await asyncio.sleep(self.config.animation_pause)

    async def render_tick(self) -> Frame:
        """Sample, render and commit one frame"""
        sample = self.reader.collect()
        accelerator_live = await self.probe.poll(self.tick)
        frame = self.compose_frame(sample, accelerator_live, self.tick)

        for cell, (r, g, b) in frame.items():
            self.display.set_pixel(int(cell), r, g, b)
        # One flush per tick, no partial frames
        self.display.show()
        return frame

    def compose_frame(
        self,
        sample: TelemetrySample,
        accelerator_live: bool,
        tick: int,
    ) -> Frame:
        """Map one sample onto the eight cells"""
        config = self.config
        eth, wlan = config.interfaces

        intensity = heartbeat_intensity(tick, config.heartbeat_period_ticks)
        temp_fraction = temperature_fraction(
            sample.temperature_c, config.temp_low_c, config.temp_high_c
        )

        return {
            Cell.HEARTBEAT: heartbeat_color(
                intensity, sample.temperature_c, config.temp_warm_c, config.temp_hot_c
            ),
            Cell.CPU: load_to_rgb(sample.cpu_load),
            Cell.RAM: load_to_rgb(sample.ram_used),
            Cell.DISK: load_to_rgb(sample.disk_used),
            Cell.ETH: link_color(sample.links.get(eth, False), ETH_UP),
            Cell.WLAN: link_color(sample.links.get(wlan, False), WLAN_UP),
            Cell.ACCELERATOR: accelerator_color(accelerator_live),
            Cell.TEMPERATURE: load_to_rgb(temp_fraction),
        }

    async def _sleep(self, seconds: float) -> None:
        """Sleep that returns early once shutdown is requested"""
        try:
            await asyncio.wait_for(self._shutdown_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    def _clear_display(self) -> None:
        try:
            self.display.clear()
            self.display.show()
        except Exception as e:
            logger.error(f"Failed to clear display on exit: {e}")
            return
        self.last_frame = {cell: OFF for cell in Cell}
        logger.info("Display cleared")

    def _setup_signal_handlers(self) -> None:
        """Setup shutdown signal handlers"""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            try:
                loop.add_signal_handler(sig, self.request_shutdown)
                self._signals_installed.append(sig)
            except NotImplementedError:
                # Windows doesn't support add_signal_handler
                signal.signal(sig, lambda s, f: self.request_shutdown())

    def _remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._signals_installed:
            loop.remove_signal_handler(sig)
        self._signals_installed.clear()
