#!/usr/bin/env python3
"""
Test LED Logic

Checks the color mapping without any hardware or telemetry sources:
- load -> green/yellow/red ramp
- heartbeat pulse and temperature bands
- temperature -> fraction clamping
- fixed pixel layout

Run with:
    python -m pytest test_led_logic.py
"""

import math

import pytest

from beholder.common.config import Cell, NUM_CELLS
from beholder.services.leds.colors import (
    ACCELERATOR_IDLE,
    ACCELERATOR_LIVE,
    ETH_UP,
    OFF,
    accelerator_color,
    heartbeat_color,
    heartbeat_intensity,
    link_color,
    load_to_rgb,
    temperature_fraction,
)


# --- load -> color -----------------------------------------------------------

@pytest.mark.parametrize("fraction, expected", [
    (0.0, (0, 255, 0)),
    (0.5, (255, 255, 0)),
    (1.0, (255, 0, 0)),
    (0.2, (102, 255, 0)),
    (0.9, (255, 51, 0)),
])
def test_load_to_rgb_reference_points(fraction, expected):
    assert load_to_rgb(fraction) == expected


def test_load_to_rgb_ramps_are_monotonic():
    """Red never falls and green never rises as load increases"""
    previous = load_to_rgb(0.0)
    for step in range(1, 101):
        r, g, b = load_to_rgb(step / 100)
        assert 0 <= r <= 255 and 0 <= g <= 255 and b == 0
        assert r >= previous[0]
        assert g <= previous[1]
        previous = (r, g, b)


def test_load_to_rgb_ramps_are_symmetric():
    """Red below the midpoint mirrors green above it"""
    for step in range(0, 50):
        low = load_to_rgb(step / 100)
        high = load_to_rgb(1.0 - step / 100)
        # Allow one step for float rounding at .5 boundaries
        assert abs(low[0] - high[1]) <= 1


def test_load_to_rgb_saturates_out_of_range():
    assert load_to_rgb(-0.5) == (0, 255, 0)
    assert load_to_rgb(3.0) == (255, 0, 0)
    assert load_to_rgb(math.nan) == (0, 255, 0)


# --- heartbeat --------------------------------------------------------------

@pytest.mark.parametrize("period_ticks", [1, 2, 2.5, 7, 60])
def test_heartbeat_intensity_bounded(period_ticks):
    for tick in list(range(200)) + [10**9, 10**12 + 3, 2**53 - 1]:
        assert 40 <= heartbeat_intensity(tick, period_ticks) <= 255


def test_heartbeat_intensity_follows_sine():
    # Quarter period is the crest, three quarters the trough
    assert heartbeat_intensity(1, 4) == 255
    assert heartbeat_intensity(3, 4) == 40
    assert heartbeat_intensity(0, 4) == heartbeat_intensity(4, 4)


def test_heartbeat_intensity_is_periodic_over_long_uptime():
    assert heartbeat_intensity(1, 8) == heartbeat_intensity(1 + 8 * 10**9, 8)


@pytest.mark.parametrize("temp_c, expected", [
    (45.0, (0, 200, 0)),
    (59.9, (0, 200, 0)),
    (60.0, (200, 200, 0)),
    (69.9, (200, 200, 0)),
    (70.0, (200, 0, 0)),
    (85.0, (200, 0, 0)),
])
def test_heartbeat_color_bands(temp_c, expected):
    assert heartbeat_color(200, temp_c) == expected


# --- temperature -------------------------------------------------------------

@pytest.mark.parametrize("temp_c, expected", [
    (0.0, 0.0),
    (30.0, 0.0),
    (55.0, 0.5),
    (75.0, 0.9),
    (80.0, 1.0),
    (105.0, 1.0),
])
def test_temperature_fraction(temp_c, expected):
    assert temperature_fraction(temp_c) == pytest.approx(expected)


def test_hot_soc_renders_near_red():
    """75 C -> fraction 0.9 -> (255, 51, 0)"""
    assert load_to_rgb(temperature_fraction(75.0)) == (255, 51, 0)


# --- layout -----------------------------------------------------------------

def test_cells_are_a_fixed_bijection():
    assert NUM_CELLS == 8
    assert sorted(int(cell) for cell in Cell) == list(range(8))
    assert Cell.HEARTBEAT == 0
    assert Cell.TEMPERATURE == 7


def test_link_and_accelerator_colors():
    assert link_color(True, ETH_UP) == (0, 0, 255)
    assert link_color(False, ETH_UP) == OFF
    assert accelerator_color(True) == ACCELERATOR_LIVE
    assert accelerator_color(False) == ACCELERATOR_IDLE
