"""
LED Status Service

Responsibilities:
- Sample CPU, memory, disk, network, accelerator and temperature telemetry
- Render each metric to its own pixel once per second
- Clear the strip on SIGINT/SIGTERM
"""

from .service import LedService

__all__ = ["LedService"]
