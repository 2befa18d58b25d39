"""Centralized logging configuration using Loguru."""

from __future__ import annotations

import pathlib
import sys
from typing import Optional

from loguru import logger


def setup_logging(
    *,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    log_directory: Optional[str] = None,
    log_filename: str = "prebuild.log",
) -> None:
    """Configure logging sinks for a prebuild run.

    Parameters
    ----------
    console_level:
        Minimum log level for console output.
    file_level:
        Minimum log level for file output.
    log_directory:
        Where the structured log file should be stored. ``None`` disables the
        file sink.
    log_filename:
        Name of the file that captures structured log output.

    Console logs go to stderr because the build tool reads directives from
    stdout. Existing handlers are removed to avoid duplicate entries when
    reconfiguring.
    """

    logger.remove()

    logger.add(
        sys.stderr,
        level=console_level.upper(),
        backtrace=True,
        diagnose=False,
        colorize=True,
    )

    if log_directory is None:
        logger.debug("Logging configured without file sink")
        return

    log_path = pathlib.Path(log_directory).expanduser().resolve()
    log_path.mkdir(parents=True, exist_ok=True)
    file_path = log_path / log_filename

    logger.add(
        file_path,
        level=file_level.upper(),
        backtrace=False,
        diagnose=False,
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        serialize=True,
    )

    logger.bind(
        console_level=console_level,
        file_level=file_level,
        log_directory=str(log_path),
        log_file=str(file_path),
    ).debug("Logging configured")


__all__ = ["setup_logging"]
