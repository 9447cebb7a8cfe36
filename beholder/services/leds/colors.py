"""
Color Mapping

Pure functions turning telemetry values into RGB triples.
Shared by the render loop and the --status CLI.
"""

import math

RGB = tuple[int, int, int]

OFF: RGB = (0, 0, 0)
ETH_UP: RGB = (0, 0, 255)           # blue
WLAN_UP: RGB = (0, 255, 255)        # cyan
ACCELERATOR_LIVE: RGB = (180, 0, 255)   # magenta
ACCELERATOR_IDLE: RGB = (30, 0, 40)     # dim purple
SWEEP: RGB = (180, 0, 255)

HEARTBEAT_MIN = 40
HEARTBEAT_RANGE = 215


def _channel(value: float) -> int:
    return max(0, min(255, int(round(value))))


def load_to_rgb(fraction: float) -> RGB:
    """
    Map a 0.0-1.0 load fraction onto green -> yellow -> red.

    Yellow sits exactly at 0.5. Out-of-range input saturates at the ends.
    """
    if math.isnan(fraction):
        fraction = 0.0

    if fraction < 0.5:
        # Green to yellow
        r = 255 * fraction * 2
        g = 255
    else:
        # Yellow to red
        r = 255
        g = 255 * (1.0 - (fraction - 0.5) * 2)
    return (_channel(r), _channel(g), 0)


def heartbeat_intensity(tick: int, period_ticks: float) -> int:
    """
    Sinusoidal pulse brightness in [40, 255].

    The phase is taken modulo the period so long uptimes keep full precision.
    """
    phase = math.fmod(tick, period_ticks) / period_ticks
    pulse = (math.sin(phase * 2 * math.pi) + 1) / 2
    return max(HEARTBEAT_MIN, min(255, int(HEARTBEAT_MIN + pulse * HEARTBEAT_RANGE)))


def heartbeat_color(
    intensity: int,
    temp_c: float,
    warm_c: float = 60.0,
    hot_c: float = 70.0,
) -> RGB:
    """Green when cool, yellow when warm, red when hot"""
    if temp_c < warm_c:
        return (0, intensity, 0)
    if temp_c < hot_c:
        return (intensity, intensity, 0)
    return (intensity, 0, 0)


def temperature_fraction(
    temp_c: float,
    low_c: float = 30.0,
    high_c: float = 80.0,
) -> float:
    """Map temp_c linearly from [low_c, high_c] onto [0, 1], clamped"""
    return max(0.0, min(1.0, (temp_c - low_c) / (high_c - low_c)))


def link_color(up: bool, color: RGB) -> RGB:
    return color if up else OFF


def accelerator_color(live: bool) -> RGB:
    return ACCELERATOR_LIVE if live else ACCELERATOR_IDLE
