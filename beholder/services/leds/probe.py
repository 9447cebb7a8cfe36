"""
Accelerator Liveness Probe

Runs the accelerator health-check command (hailortcli fw-control identify)
only every Nth tick and caches the result in between. The probe is a
subprocess spawn, far too slow to run on every 1-second tick.
"""

import asyncio

from beholder.common.logging_setup import get_service_logger, log_liveness_change

logger = get_service_logger("leds.probe")


class AcceleratorProbe:
    """Throttled, cached liveness check"""

    def __init__(
        self,
        command: list[str],
        timeout: float = 3.0,
        every_ticks: int = 30,
        name: str = "accelerator",
    ):
        self.command = list(command)
        self.timeout = timeout
        self.every_ticks = every_ticks
        self.name = name

        self.live = False
        self.probe_count = 0
        self.last_probe_tick: int | None = None

    def is_due(self, tick: int) -> bool:
        return tick % self.every_ticks == 0

    async def poll(self, tick: int) -> bool:
        """Return cached liveness, re-probing on ticks 0, N, 2N, ..."""
        if not self.is_due(tick):
            return self.live

        live = await self.probe()
        self.probe_count += 1
        self.last_probe_tick = tick

        if live != self.live or self.probe_count == 1:
            log_liveness_change(logger, self.name, live, tick)
        self.live = live
        return live

    async def probe(self) -> bool:
        """
        Run the health-check command once.

        Timeout, non-zero exit, missing binary and OS errors all mean
        "not live". If the wait is cancelled the child is killed.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except FileNotFoundError:
            logger.debug(f"Probe command not found: {self.command[0]}")
            return False
        except OSError as e:
            logger.debug(f"Probe spawn failed: {e}")
            return False

        try:
            returncode = await asyncio.wait_for(process.wait(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Probe timed out after {self.timeout}s")
            await self._kill(process)
            return False
        except asyncio.CancelledError:
            await self._kill(process)
            raise

        return returncode == 0

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()
