"""
Beholder Services

- leds - Status LED daemon (telemetry -> Blinkt! pixels)
"""
