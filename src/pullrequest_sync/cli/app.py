"""Main CLI application for pullrequest-sync."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from pullrequest_sync import __version__
from pullrequest_sync.cli import sync as sync_cmd
from pullrequest_sync.config import Settings, get_settings
from pullrequest_sync.logging import setup_logging

app = typer.Typer(
    name="prsync",
    help="Download a pull request to disk and upload edits back.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"prsync version {__version__}")
        raise typer.Exit()


def configure_logging(
    settings: Settings,
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> None:
    """Apply logging settings; a --log-file given on the command line wins."""
    log_config = settings.logging
    if log_file is None and log_config.log_file:
        log_file = Path(log_config.log_file)

    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log warnings and errors."),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Also write a DEBUG log here (overrides LOGGING__LOG_FILE).",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """pullrequest-sync - treat a pull request as files in a pipeline workspace."""
    configure_logging(get_settings(), verbose=verbose, quiet=quiet, log_file=log_file)


# Commands are registered directly on the root app: `prsync download ...`
app.command("run")(sync_cmd.run)
app.command("download")(sync_cmd.download)
app.command("upload")(sync_cmd.upload)


if __name__ == "__main__":
    app()
