"""
Rich-based logger with account context support.

Loggers returned by `get_logger` prefix every message with the account
(WABA, phone number or media ID) the current operation is scoped to.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wacloud.core.config.settings import settings

from .context import get_current_account_context

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
NOISY_LIBRARIES = ("aiohttp.access", "aiohttp.client", "asyncio")


class CompactFormatter(logging.Formatter):
    """Keeps only the last two parts of wacloud logger names."""

    def format(self, record):
        if record.name.startswith("wacloud."):
            # wacloud.messaging.whatsapp.handlers.whatsapp_media_handler -> handlers.whatsapp_media_handler
            record.name = ".".join(record.name.split(".")[-2:])
        return super().format(record)


_console = Console(
    theme=Theme(
        {"info": "cyan", "warning": "yellow", "error": "bold red", "debug": "dim white"}
    ),
    stderr=True,
)


class ContextLogger:
    """
    Logger wrapper that prefixes messages with `[A:<account>]`.

    The account active in the current context wins over the one the logger
    was created or bound with.
    """

    def __init__(self, logger: logging.Logger, account_id: str | None = None):
        self.logger = logger
        self.account_id = account_id

    def _prefixed(self, message: str) -> str:
        account = get_current_account_context() or self.account_id
        return f"[A:{account}] {message}" if account else message

    def _log(self, level: int, message: str, *args, **kwargs) -> None:
        if self.logger.isEnabledFor(level):
            # report the caller of debug()/info()/..., not this helper
            kwargs.setdefault("stacklevel", 3)
            self.logger.log(level, self._prefixed(message), *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def bind(self, **kwargs) -> ContextLogger:
        """
        Return a logger bound to another account.

        Example:
            waba_logger = logger.bind(account_id="102290129340398")
        """
        return ContextLogger(self.logger, kwargs.get("account_id", self.account_id))


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR (unknown values mean INFO)
        mode: "DEV" adds a daily file under `log_dir` next to the console output
        log_dir: Directory of the daily log files
        console_fmt: Console format (RichHandler already renders time and level)
        file_fmt: Log file format
    """
    lvl = level.upper() if level.upper() in LOG_LEVELS else "INFO"

    console_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    console_handler.setFormatter(
        CompactFormatter(console_fmt or "[%(name)s] %(message)s")
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_dir and mode.upper() == "DEV":
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f"wacloud_{datetime.now():%Y%m%d}.log"),
            encoding="utf-8",
        )
        file_handler.setFormatter(
            CompactFormatter(
                file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    # aiohttp and asyncio chatter drowns the request logs at DEBUG
    if lvl == "DEBUG":
        for name in NOISY_LIBRARIES:
            logging.getLogger(name).setLevel(logging.INFO)

    logging.getLogger("wacloud.logging").debug(f"Logging initialized ({lvl}, {mode})")


def setup_app_logging() -> None:
    """Configure logging from the environment settings."""
    development = settings.is_development
    setup_logging(
        level=settings.log_level,
        mode=settings.environment,
        log_dir=settings.log_dir if development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger for a module.

    Args:
        name: Logger name, usually __name__

    Returns:
        ContextLogger that picks up the account of the running operation
    """
    return ContextLogger(logging.getLogger(name), get_current_account_context())
