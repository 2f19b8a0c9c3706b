"""Logging utilities for DepDrift."""

import logging
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "dep_drift"

_file_handler: Optional[logging.Handler] = None


class DepDriftLogger:
    """Logger wrapper writing rich formatted records to stderr."""

    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Attach a rich console handler once per logger."""
        if _file_handler is not None and _file_handler not in self.logger.handlers:
            self.logger.addHandler(_file_handler)

        if any(isinstance(h, RichHandler) for h in self.logger.handlers):
            return

        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))

        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str, **kwargs: Any) -> None:
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self.logger.debug(msg, extra=kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self.logger.critical(msg, extra=kwargs)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for DepDrift.

    Args:
        level: Logging level for DepDrift loggers
        log_file: Optional log file path
        verbose: Enable debug logging
    """
    global _file_handler

    if verbose:
        level = logging.DEBUG

    # child loggers inherit their effective level from here
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        for name in list(logging.root.manager.loggerDict):
            if name.startswith(ROOT_LOGGER_NAME + "."):
                child = logging.getLogger(name)
                if _file_handler is not None:
                    child.removeHandler(_file_handler)
                child.addHandler(file_handler)
        if _file_handler is not None:
            _file_handler.close()
        # loggers created later pick this up in DepDriftLogger
        _file_handler = file_handler

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> DepDriftLogger:
    """Get a DepDrift logger instance.

    Args:
        name: Logger name, conventionally under the ``dep_drift`` namespace

    Returns:
        Configured logger instance
    """
    return DepDriftLogger(name)
