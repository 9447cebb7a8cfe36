"""
Custom Exception Classes for the Beholder LED daemon

Telemetry and probe failures never raise; they degrade to safe defaults.
These exceptions cover the startup-fatal cases (bad config, no display).
"""


class BeholderError(Exception):
    """Base exception for all Beholder daemon errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class ConfigError(BeholderError):
    """Configuration-related errors"""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(f"Config Error: {message}", recoverable=False)


class DisplayError(BeholderError):
    """Pixel strip unavailable or write failed"""

    def __init__(self, message: str, recoverable: bool = False):
        super().__init__(f"Display Error: {message}", recoverable)
