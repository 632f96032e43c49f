"""PR Sync module - GitHub to disk and back.

Services:
- PullRequestDownloader: Provider state → snapshot directory
- PullRequestUploader: Snapshot directory → provider mutations
"""

from .download import PullRequestDownloader
from .enums import CommentAction, OutputFormat, SyncMode
from .layout import SnapshotDecodeError, SnapshotLayout
from .results import DownloadResult, UploadResult
from .upload import CommentOperation, CommentSyncPlan, PullRequestUploader, plan_comment_sync

__all__ = [
    # Download
    "DownloadResult",
    "PullRequestDownloader",
    # Upload
    "CommentAction",
    "CommentOperation",
    "CommentSyncPlan",
    "PullRequestUploader",
    "UploadResult",
    "plan_comment_sync",
    # Snapshot layout
    "SnapshotDecodeError",
    "SnapshotLayout",
    # Enums
    "OutputFormat",
    "SyncMode",
]
