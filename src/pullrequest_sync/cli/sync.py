"""Download and upload commands."""

import json
from pathlib import Path

import typer
from rich.markup import escape

from pullrequest_sync.cli.common import (
    DryRunOption,
    OutputFormatOption,
    PathArgument,
    StrictURLOption,
    URLArgument,
    console,
    run_async_command,
    validate_pull_request_url,
)
from pullrequest_sync.config import get_settings
from pullrequest_sync.github import (
    DownloadResult,
    GitHubClient,
    OutputFormat,
    PullRequestDownloader,
    PullRequestUploader,
    SyncMode,
    UploadResult,
)
from pullrequest_sync.logging import get_logger
from pullrequest_sync.schemas import PullRequestRef

logger = get_logger(__name__)


async def _sync(
    mode: SyncMode,
    ref: PullRequestRef,
    path: Path,
    *,
    dry_run: bool,
) -> DownloadResult | UploadResult:
    settings = get_settings()
    if not settings.github_token:
        logger.warning("No GitHub token configured, running unauthenticated")

    async with GitHubClient(settings.github_token, base_url=settings.github_base_url) as client:
        if mode == SyncMode.DOWNLOAD:
            logger.info("Running download of {} into {}", ref, path)
            return await PullRequestDownloader(client, ref).download(path)
        logger.info("Running upload of {} to {}", path, ref)
        return await PullRequestUploader(client, ref).upload(path, dry_run=dry_run)


def _print_result(result: DownloadResult | UploadResult, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
        return

    if isinstance(result, DownloadResult):
        console.print(
            f"[bold]Downloaded[/bold] {escape(str(result.ref))} to {escape(str(result.path))}: "
            f"{len(result.comment_ids)} comment(s), {len(result.labels)} label(s)"
        )
        return

    prefix = "[dim](dry-run)[/dim] " if result.dry_run else ""
    console.print(
        f"{prefix}[bold]Uploaded[/bold] {escape(str(result.ref))}: "
        f"labels={escape(str(result.labels))} "
        f"created={len(result.created)} updated={len(result.updated)} "
        f"deleted={len(result.deleted)} unchanged={len(result.unchanged)}"
    )


def execute(
    mode: SyncMode,
    url: str,
    path: Path,
    *,
    dry_run: bool = False,
    strict_url: bool = False,
    output_format: OutputFormat = OutputFormat.TEXT,
) -> None:
    """Resolve the URL, run one sync mode and report the result."""
    if dry_run and mode == SyncMode.DOWNLOAD:
        console.print("[red]Error:[/red] --dry-run only applies to upload")
        raise typer.Exit(1)

    ref = validate_pull_request_url(url, strict=strict_url)
    result = run_async_command(
        _sync(mode, ref, path, dry_run=dry_run),
        error_prefix=f"{mode.value.title()} failed",
    )
    _print_result(result, output_format)


def run(
    url: str = typer.Option(
        ...,
        "--url",
        help="The url of the pull request to initialize.",
    ),
    path: Path = typer.Option(  # noqa: B008
        ...,
        "--path",
        help="Path of directory under which PR will be copied",
        file_okay=False,
    ),
    mode: SyncMode = typer.Option(  # noqa: B008
        SyncMode.DOWNLOAD,
        "--mode",
        "-m",
        help="Whether to operate in download or upload mode",
    ),
    dry_run: DryRunOption = False,
    strict_url: StrictURLOption = False,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Download or upload a pull request, selected by --mode.

    Examples:
        prsync run --url https://github.com/owner/repo/pull/1 --path /workspace/pr
        prsync run --mode upload --url https://github.com/owner/repo/pull/1 --path /workspace/pr
    """
    execute(
        mode,
        url,
        path,
        dry_run=dry_run,
        strict_url=strict_url,
        output_format=output_format,
    )


def download(
    url: URLArgument,
    path: PathArgument,
    strict_url: StrictURLOption = False,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Write a pull request, its comments and labels to a directory.

    Examples:
        prsync download https://github.com/owner/repo/pull/1 /workspace/pr
    """
    execute(SyncMode.DOWNLOAD, url, path, strict_url=strict_url, output_format=output_format)


def upload(
    url: URLArgument,
    path: PathArgument,
    dry_run: DryRunOption = False,
    strict_url: StrictURLOption = False,
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Push label and comment edits from a directory back to the pull request.

    Examples:
        prsync upload https://github.com/owner/repo/pull/1 /workspace/pr
        prsync upload https://github.com/owner/repo/pull/1 /workspace/pr --dry-run
    """
    execute(
        SyncMode.UPLOAD,
        url,
        path,
        dry_run=dry_run,
        strict_url=strict_url,
        output_format=output_format,
    )
