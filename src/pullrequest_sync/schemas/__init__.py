"""Pydantic schemas for pullrequest-sync.

This module provides the GitHub payload parsers, the provider-agnostic
on-disk model and pull request URL resolution.
"""

from .github_api import (
    GitHubBranch,
    GitHubComment,
    GitHubLabel,
    GitHubPullRequest,
    GitHubRepository,
    GitHubUser,
)
from .pull_request import (
    PROVIDER_GITHUB,
    Comment,
    GitReference,
    Label,
    PullRequest,
)
from .pull_request_ref import (
    EmptyPullRequestURLError,
    InvalidPullRequestNumberError,
    MalformedPullRequestURLError,
    PullRequestRef,
    PullRequestURLError,
    parse_pull_request_url,
)

__all__ = [
    # GitHub API
    "GitHubBranch",
    "GitHubComment",
    "GitHubLabel",
    "GitHubPullRequest",
    "GitHubRepository",
    "GitHubUser",
    # Generic model
    "PROVIDER_GITHUB",
    "Comment",
    "GitReference",
    "Label",
    "PullRequest",
    # URL resolution
    "EmptyPullRequestURLError",
    "InvalidPullRequestNumberError",
    "MalformedPullRequestURLError",
    "PullRequestRef",
    "PullRequestURLError",
    "parse_pull_request_url",
]
