from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.text import Text

from ..config import PATHCOPY_CONFIG

LOGGER_NAME = "pathcopy"
_ACTION_COLOR_ATTR = "pathcopy_action_color"

_LEVEL_STYLES = {
    "DEBUG": "dim",
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}


class _PathcopyRichConsoleHandler(logging.Handler):
    """Console handler that prints ``LEVEL message [file.py:line]`` with rich."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._console = Console(stderr=True)

    @staticmethod
    def _format_location(record: logging.LogRecord) -> str:
        return f"[{Path(record.pathname).name}:{record.lineno}]"

    @staticmethod
    def _format_message_text(record: logging.LogRecord) -> Text:
        message = record.getMessage()
        color = getattr(record, _ACTION_COLOR_ATTR, None)
        text = Text(message)
        if color:
            action, _, _ = message.partition(" ")
            text.stylize(color, 0, len(action))
        return text

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = Text()
            line.append(
                f"{record.levelname:<8}", style=_LEVEL_STYLES.get(record.levelname, "")
            )
            line.append(" ")
            line.append_text(self._format_message_text(record))
            line.append(" ")
            line.append(self._format_location(record), style="dim")
            self._console.print(line, soft_wrap=True)
            if record.exc_info:
                self._console.print_exception()
        except Exception:
            self.handleError(record)


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging() -> logging.Logger:
    """Attach the rich console handler to the pathcopy logger.

    Safe to call repeatedly: the handler is only added once, while the level is
    refreshed from ``PATHCOPY_CONFIG.log_level`` on every call.
    """

    logger = get_logger()
    logger.setLevel(PATHCOPY_CONFIG.log_level)
    if not any(isinstance(h, _PathcopyRichConsoleHandler) for h in logger.handlers):
        logger.addHandler(_PathcopyRichConsoleHandler())
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
