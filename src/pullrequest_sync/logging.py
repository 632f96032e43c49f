"""Centralized logging configuration using loguru.

Provides:
- Configurable log levels from Settings
- CLI flag override (--verbose/--quiet)
- Standard library interception (httpx, used by githubkit)
- Pull request context in every sync log line
- Optional file rotation logging
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Loggers that githubkit drives through the standard library
_HTTP_LOGGERS = ("httpx", "httpcore")

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[name]}:{function}:{line} | {extra} | {message}"
)

_configured = False


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip the logging module's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _console_format(record: Record) -> str:
    """Console line format; sync services get the PR they act on as a prefix."""
    extra = record["extra"]
    source = "<cyan>{extra[name]}</cyan>" if "name" in extra else "<cyan>{name}</cyan>"
    target = "<magenta>{extra[repo]}#{extra[pr]}</magenta> " if "pr" in extra else ""
    return (
        "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | "
        f"{source} - {target}<level>{{message}}</level>\n{{exception}}"
    )


def _has_name(record: Record) -> bool:
    return "name" in record["extra"]


def _effective_level(level: LogLevel, verbose: bool, quiet: bool) -> LogLevel:
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return level


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure logging for the application.

    Console output goes to stderr so that ``--format json`` on stdout stays
    machine-readable.

    Args:
        level: Base log level from config
        verbose: If True, use DEBUG level (overrides level)
        quiet: If True, use WARNING level (overrides level)
        log_file: Optional path for file logging with rotation
        rotation: When to rotate log file (e.g., "10 MB", "1 day")
        retention: How long to keep rotated logs
        serialize: If True, write JSON records to the log file

    Returns:
        Configured logger instance

    Note:
        verbose takes precedence over quiet if both are True.
    """
    global _configured

    effective_level = _effective_level(level, verbose, quiet)

    logger.remove()
    logger.add(
        sys.stderr,
        level=effective_level,
        format=_console_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if log_file:
        # The file always gets DEBUG, whatever the console shows
        logger.add(
            log_file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
            filter=_has_name,
        )

    _intercept_stdlib_logging(effective_level)

    _configured = True
    return logger


def _intercept_stdlib_logging(level: LogLevel) -> None:
    """Route stdlib loggers (httpx/httpcore under githubkit) to loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    http_level = logging.DEBUG if level in ("TRACE", "DEBUG") else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> Logger:
    """Get a logger with the given name bound as context.

    Usage:
        from pullrequest_sync.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Writing pull request to file: {}", path)
    """
    return logger.bind(name=name)


def bind_pr(owner: str, repo: str, pr_number: int) -> Logger:
    """Logger for a sync service acting on one pull request.

    Console lines carry an ``owner/repo#number`` prefix; file records carry
    ``repo`` and ``pr`` as structured extras.
    """
    return logger.bind(name="sync", repo=f"{owner}/{repo}", pr=pr_number)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def reset_logging() -> None:
    """Remove all sinks and forget the configuration (used by tests)."""
    global _configured
    logger.remove()
    _configured = False
