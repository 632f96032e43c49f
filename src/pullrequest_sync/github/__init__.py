"""GitHub API client module.

This module provides:
- GitHubClient: Async GitHub API client for PRs, comments and labels
- PR Sync: PullRequestDownloader, PullRequestUploader
"""

from .client import GitHubClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from .sync import (
    DownloadResult,
    OutputFormat,
    PullRequestDownloader,
    PullRequestUploader,
    SnapshotDecodeError,
    SyncMode,
    UploadResult,
)

__all__ = [
    # Client
    "GitHubClient",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    # PR Sync
    "DownloadResult",
    "OutputFormat",
    "PullRequestDownloader",
    "PullRequestUploader",
    "SnapshotDecodeError",
    "SyncMode",
    "UploadResult",
]
