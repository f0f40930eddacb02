#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for applications embedding notelens.

The library itself only creates module loggers under ``notelens``. A host
editor calls :func:`configure_logging` once to route them somewhere useful
without touching its own root logging configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "notelens"

# Marks handlers installed here so a later call replaces only those
_HANDLER_FLAG = "_notelens_handler"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``notelens`` logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG"). Unknown names
        fall back to INFO.
    log_file : str, optional
        Path to a log file that receives the same records as the console.
    trace_mode : bool, default False
        When true, emit timestamps and logger names, useful when tracing rule
        dispatch or query compilation.
    propagate : bool, default False
        Whether records also reach the host's root handlers.

    Returns
    -------
    logging.Logger
        The configured ``notelens`` package logger.

    Notes
    -----
    Calling this again replaces the handlers installed by the previous call;
    handlers added by the host are kept.

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

    for handler in [h for h in package_logger.handlers if getattr(h, _HANDLER_FLAG, False)]:
        package_logger.removeHandler(handler)
        handler.close()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        setattr(handler, _HANDLER_FLAG, True)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if file_error is not None:
        package_logger.warning("Could not create log file %s: %s", log_file, file_error)
    elif log_file:
        package_logger.info("Logging to file: %s", log_file)

    return package_logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
