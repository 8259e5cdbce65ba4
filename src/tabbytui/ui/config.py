"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants, aligned with the stdlib logging levels.

    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARN",
        ERROR: "ERROR",
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the display name for a log level."""
        if level >= cls.ERROR:
            return cls._names[cls.ERROR]
        return cls._names.get(level, "DEBUG")


# Seconds between Tick actions sent to the reducer
TICK_INTERVAL = 1.0

# Key bindings shown in the help panel
KEY_BINDINGS = [
    ("/", "Enter input"),
    ("Esc", "Exit input"),
    ("Enter", "Submit input"),
    ("Up/Down", "Scroll"),
    ("?", "Toggle help"),
    ("q", "Quit"),
]

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages


def ticks_for_interval(seconds: float) -> int:
    """Number of ticks between health checks, 0 when disabled."""
    if seconds <= 0:
        return 0
    return max(1, round(seconds / TICK_INTERVAL))
