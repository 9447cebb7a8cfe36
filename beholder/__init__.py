"""
Beholder LED Status Daemon

Renders Raspberry Pi health onto a Blinkt! 8-pixel strip.
"""

__version__ = "1.0.0"
