"""Shared CLI utilities and type definitions.

This module provides `Annotated` type aliases for common CLI options,
avoiding B008 lint warnings for Typer's required function call pattern.

It also provides:
- `run_async_command`: Unified async execution with error handling for CLI commands
- `validate_pull_request_url`: URL resolution with user-friendly errors
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from pullrequest_sync.github.sync.enums import OutputFormat
from pullrequest_sync.logging import get_logger
from pullrequest_sync.schemas import PullRequestRef, PullRequestURLError, parse_pull_request_url

# Shared console instance for CLI output
console = Console()

logger = get_logger(__name__)

T = TypeVar("T")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Catches exceptions,
    logs and prints the cause, and exits with code 1.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except Exception as e:
        logger.error("{}: {} ({})", error_prefix, e, type(e).__name__)
        logger.opt(exception=e).debug("Traceback for {}", type(e).__name__)
        console.print(f"[red]{error_prefix}:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None


def validate_pull_request_url(url: str, *, strict: bool = False) -> PullRequestRef:
    """Resolve a pull request URL.

    Args:
        url: Pull request URL
        strict: Apply the exact-shape URL policy

    Returns:
        PullRequestRef for the URL

    Raises:
        typer.Exit(1): If the URL cannot be resolved
    """
    try:
        return parse_pull_request_url(url, strict=strict)
    except PullRequestURLError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None


# -----------------------------------------------------------------------------
# Option / Argument Aliases
# -----------------------------------------------------------------------------

OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Don't change anything on GitHub, just show what would happen",
    ),
]

StrictURLOption = Annotated[
    bool,
    typer.Option(
        "--strict-url",
        help="Require an exact https://host/owner/repo/pull/<n> URL (no trailing path)",
    ),
]

URLArgument = Annotated[
    str,
    typer.Argument(
        help="Pull request URL (e.g., https://github.com/owner/repo/pull/1)",
    ),
]

PathArgument = Annotated[
    Path,
    typer.Argument(
        help="Directory the pull request is written to / read from",
        file_okay=False,
    ),
]
