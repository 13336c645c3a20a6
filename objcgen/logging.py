"""Logging for objcgen runs.

Every module logs through ``get_logger(<component>)`` so output can be traced
back to the loader, resolver, store or emitter. Soft degradations (unparseable
signatures, duplicate methods, mixed references) are warnings; skipped members
are debug lines shown with ``--verbose``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional

ROOT_LOGGER = "objcgen"
CONSOLE_FORMAT = "[objcgen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(component: Optional[str] = None) -> logging.Logger:
    """Return the logger of one pipeline component, e.g. ``objcgen.loader``."""
    if not component:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Route objcgen records to ``stream`` (stderr by default) and optionally to ``log_file``.

    The file sink always records debug lines so a failed run can be inspected
    without re-running it verbosely.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(stream), console_level, CONSOLE_FORMAT)
    level = console_level
    if log_file is not None:
        log_file = log_file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, FILE_FORMAT)
        level = logging.DEBUG
    logger.setLevel(level)
    return logger


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


__all__ = ["CONSOLE_FORMAT", "FILE_FORMAT", "ROOT_LOGGER", "configure_logging", "get_logger"]
