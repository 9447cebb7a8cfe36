"""
Pixel Display

Abstract 8-pixel strip plus the Blinkt! (APA102) implementation.
Writes are buffered; nothing reaches the LEDs until show().
"""

from abc import ABC, abstractmethod

from beholder.common.config import NUM_CELLS
from beholder.common.exceptions import DisplayError


class PixelDisplay(ABC):
    """Buffered RGB pixel strip"""

    num_pixels: int = NUM_CELLS

    @abstractmethod
    def set_brightness(self, brightness: float) -> None:
        """Set global brightness, 0.0-1.0"""

    @abstractmethod
    def set_pixel(self, index: int, r: int, g: int, b: int) -> None:
        """Buffer one pixel"""

    @abstractmethod
    def clear(self) -> None:
        """Buffer all pixels off"""

    @abstractmethod
    def show(self) -> None:
        """Flush the buffer to the hardware"""


class BlinktDisplay(PixelDisplay):
    """Pimoroni Blinkt! on the SPI/GPIO header"""

    def __init__(self):
        try:
            import blinkt
        except ImportError as e:
            raise DisplayError(
                f"blinkt library not available ({e}). Install with: pip install blinkt"
            )
        except RuntimeError as e:
            # RPi.GPIO refuses to load off a Raspberry Pi
            raise DisplayError(f"GPIO unavailable: {e}")

        self._blinkt = blinkt
        self.num_pixels = blinkt.NUM_PIXELS
        blinkt.set_clear_on_exit(True)

    def set_brightness(self, brightness: float) -> None:
        self._blinkt.set_brightness(brightness)

    def set_pixel(self, index: int, r: int, g: int, b: int) -> None:
        self._blinkt.set_pixel(index, r, g, b)

    def clear(self) -> None:
        self._blinkt.clear()

    def show(self) -> None:
        self._blinkt.show()
