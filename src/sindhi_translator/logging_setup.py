"""
Logging configuration.

Console output goes through rich; an optional rotating log file receives
the same records in plain text.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from sindhi_translator.config import LoggingConfig

_HANDLER_MARKER = "_sindhi_translator_handler"


def configure_logging(config: LoggingConfig, console: Console | None = None) -> None:
    """
    Install console and file handlers on the root logger.

    Calling this again replaces the handlers installed by a previous call,
    leaving handlers added by other code (pytest, uvicorn) alone.

    Args:
        config: Logging section of the settings.
        console: Rich console to log to; a stderr console by default.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(rich_handler, _HANDLER_MARKER, True)
    root.addHandler(rich_handler)

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(config.format))
        setattr(file_handler, _HANDLER_MARKER, True)
        root.addHandler(file_handler)

    root.setLevel(config.level.upper())
    # Request-level chatter from the HTTP client drowns out our own records
    logging.getLogger("httpx").setLevel(logging.WARNING)
