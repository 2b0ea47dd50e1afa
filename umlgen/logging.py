"""Logger hierarchy and handler setup for umlgen runs."""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER = "umlgen"
CONSOLE_FORMAT = "[umlgen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``umlgen.<name>``, or the ``umlgen`` root when no name is given."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _attach(logger: logging.Logger, handler: logging.Handler, fmt: str) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def _detach_all(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route umlgen records to stderr and, when ``log_file`` is set, to that file.

    Calling this again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    _detach_all(logger)

    _attach(logger, logging.StreamHandler(), CONSOLE_FORMAT)
    if log_file is not None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_path, encoding="utf-8"), FILE_FORMAT)
    return logger


__all__ = ["CONSOLE_FORMAT", "FILE_FORMAT", "configure_logging", "get_logger"]
