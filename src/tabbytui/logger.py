"""Logging setup for tabbytui.

While the TUI owns the terminal nothing may be written to stdout/stderr, so
records go to the in-app log panel and, optionally, to a JSON lines file.
"""

import json
import logging
import traceback as tb_module
from collections.abc import Callable
from datetime import datetime, timezone

ROOT_LOGGER = "tabbytui"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_level(level: str | None, default: int = logging.DEBUG) -> int:
    """Convert a level name to a logging level. Unknown names give ``default``."""
    if not level:
        return default
    return _LEVELS.get(level.lower(), default)


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["error_type"] = record.exc_info[0].__name__
            entry["error_message"] = str(record.exc_info[1])
            entry["stack_trace"] = tb_module.format_exception(*record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class PanelHandler(logging.Handler):
    """Forwards records to a sink such as the TUI log panel.

    The sink receives the short component name, the message and the level.
    """

    def __init__(self, sink: Callable[[str, str, int], None], level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            component = record.name.rsplit(".", 1)[-1]
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                message = f"{message}: {record.exc_info[1]}"
            self._sink(component, message, record.levelno)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    panel_sink: Callable[[str, str, int], None] | None = None,
) -> logging.Logger:
    """Configure the ``tabbytui`` logger hierarchy.

    Args:
        level: Minimum level name (debug/info/warning/error); debug if omitted
        log_file: Path of a JSON lines log file, None to disable
        panel_sink: Callable receiving (component, message, level) records

    Returns:
        The configured root logger of the package
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    threshold = parse_level(level)
    logger.setLevel(threshold)
    logger.propagate = False

    if panel_sink is not None:
        logger.addHandler(PanelHandler(panel_sink, threshold))

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
