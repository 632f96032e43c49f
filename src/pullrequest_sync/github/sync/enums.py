"""Enums for sync operations."""

from enum import Enum


class SyncMode(str, Enum):
    """Direction of a sync run. A process runs in exactly one mode."""

    DOWNLOAD = "download"
    """Fetch provider state into the snapshot directory."""

    UPLOAD = "upload"
    """Reconcile the snapshot directory back into provider state."""


class CommentAction(str, Enum):
    """Provider mutation planned for a single comment."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UNCHANGED = "unchanged"


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""
