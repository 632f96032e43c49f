"""Pull request sync - download a PR to disk, upload edits back."""

__version__ = "0.1.0"
