"""Command-line interface for pullrequest-sync."""
