"""Result objects for sync operations.

Structured results provide consistent interfaces for logging and CLI output.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pullrequest_sync.schemas import PullRequestRef


@dataclass
class DownloadResult:
    """Result of downloading a pull request to disk."""

    ref: PullRequestRef
    path: Path
    """Path of the generic record (``<dir>/pr.json``)."""

    pr_id: int
    labels: list[str] = field(default_factory=list)
    comment_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mode": "download",
            "pull_request": str(self.ref),
            "path": str(self.path),
            "pr_id": self.pr_id,
            "labels": self.labels,
            "comments": len(self.comment_ids),
            "comment_ids": self.comment_ids,
        }


@dataclass
class UploadResult:
    """Result of reconciling a snapshot back into the provider.

    On a dry run nothing was sent; the lists describe what would have been.
    """

    ref: PullRequestRef
    labels: list[str] = field(default_factory=list)
    """Label set that replaced the provider's labels."""

    created: list[int] = field(default_factory=list)
    """Provider IDs of created comments (0 entries on dry run)."""

    updated: list[int] = field(default_factory=list)
    deleted: list[int] = field(default_factory=list)
    unchanged: list[int] = field(default_factory=list)
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        """Whether any comment mutation was issued (or planned)."""
        return bool(self.created or self.updated or self.deleted)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mode": "upload",
            "pull_request": str(self.ref),
            "dry_run": self.dry_run,
            "labels": self.labels,
            "created": self.created,
            "updated": self.updated,
            "deleted": self.deleted,
            "unchanged": self.unchanged,
        }
