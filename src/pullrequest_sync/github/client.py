"""Async GitHub API client wrapper using githubkit.

This module provides the pull request, issue comment and label operations
the sync needs. Reads return the decoded JSON payload exactly as GitHub sent
it so callers can store it verbatim; parse it with the schemas in
``pullrequest_sync.schemas.github_api`` for typed access.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from githubkit import GitHub
from githubkit.exception import RequestFailed

from pullrequest_sync.logging import get_logger

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)

logger = get_logger(__name__)

Payload = dict[str, Any]


class GitHubClient:
    """Async GitHub API client for pull request sync.

    Usage:
        async with GitHubClient(token) as client:
            payload = await client.get_pull_request("tektoncd", "pipeline", 42)
            comments = await client.list_comments("tektoncd", "pipeline", 42)

    Without a token the client is unauthenticated: reads of public
    repositories work, writes fail with GitHubAuthenticationError or
    GitHubNotFoundError from the provider.
    """

    def __init__(self, token: str | None = None, *, base_url: str | None = None) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub OAuth token or PAT. None or empty for anonymous access.
            base_url: API root, for GitHub Enterprise (default: api.github.com)
        """
        self._token = token or None
        self._base_url = base_url
        self._client: GitHub[Any] | None = None

    @property
    def authenticated(self) -> bool:
        """Whether a token was supplied."""
        return self._token is not None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            if self._base_url:
                self._client = GitHub(self._token, base_url=self._base_url)
            else:
                self._client = GitHub(self._token)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Pull Requests
    # -------------------------------------------------------------------------
    async def get_pull_request(self, owner: str, repo: str, number: int) -> Payload:
        """Get a single pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number

        Returns:
            Raw pull request payload

        Raises:
            GitHubNotFoundError: If PR doesn't exist
        """
        try:
            resp = await self._github.rest.pulls.async_get(
                owner=owner,
                repo=repo,
                pull_number=number,
            )
            return resp.json()
        except RequestFailed as e:
            raise self._handle_error(e, f"get PR #{number} in {owner}/{repo}") from e

    # -------------------------------------------------------------------------
    # Issue Comments
    # -------------------------------------------------------------------------
    async def list_comments(
        self,
        owner: str,
        repo: str,
        number: int,
        *,
        per_page: int = 100,
    ) -> list[Payload]:
        """List every issue comment on a pull request, following pagination.

        Args:
            owner: Repository owner
            repo: Repository name
            number: PR number
            per_page: Results per page (max 100)

        Returns:
            Raw comment payloads in provider order
        """
        try:
            comments: list[Payload] = []
            comment_data: Any
            async for comment_data in self._github.paginate(
                self._github.rest.issues.async_list_comments,
                map_func=lambda resp: resp.json(),
                owner=owner,
                repo=repo,
                issue_number=number,
                per_page=per_page,
            ):
                comments.append(comment_data)
            return comments
        except RequestFailed as e:
            raise self._handle_error(e, f"list comments of PR #{number} in {owner}/{repo}") from e

    async def create_comment(self, owner: str, repo: str, number: int, body: str) -> Payload:
        """Create a new comment on a pull request.

        Returns:
            Raw payload of the created comment (includes the new ID)
        """
        try:
            resp = await self._github.rest.issues.async_create_comment(
                owner=owner,
                repo=repo,
                issue_number=number,
                body=body,
            )
            return resp.json()
        except RequestFailed as e:
            raise self._handle_error(e, f"create comment on PR #{number} in {owner}/{repo}") from e

    async def edit_comment(self, owner: str, repo: str, comment_id: int, body: str) -> Payload:
        """Replace the body of an existing comment.

        Only the body is sent; author and identity stay as GitHub has them.

        Returns:
            Raw payload of the updated comment
        """
        try:
            resp = await self._github.rest.issues.async_update_comment(
                owner=owner,
                repo=repo,
                comment_id=comment_id,
                body=body,
            )
            return resp.json()
        except RequestFailed as e:
            raise self._handle_error(e, f"edit comment {comment_id} in {owner}/{repo}") from e

    async def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        """Delete a comment."""
        try:
            await self._github.rest.issues.async_delete_comment(
                owner=owner,
                repo=repo,
                comment_id=comment_id,
            )
        except RequestFailed as e:
            raise self._handle_error(e, f"delete comment {comment_id} in {owner}/{repo}") from e

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------
    async def replace_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> None:
        """Replace the whole label set of a pull request.

        An empty list removes every label.
        """
        try:
            await self._github.rest.issues.async_set_labels(
                owner=owner,
                repo=repo,
                issue_number=number,
                labels=labels,
            )
        except RequestFailed as e:
            raise self._handle_error(e, f"replace labels of PR #{number} in {owner}/{repo}") from e

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, error: RequestFailed, action: str) -> GitHubClientError:
        """Convert githubkit exceptions to our custom exceptions."""
        status = error.response.status_code
        logger.debug("GitHub request failed ({}): {}", status, action)

        if status == 401:
            return GitHubAuthenticationError(f"Failed to {action}: invalid or missing GitHub token")
        elif status == 403:
            headers = error.response.headers
            if "x-ratelimit-remaining" in headers:
                remaining = int(headers.get("x-ratelimit-remaining", "0"))
                if remaining == 0:
                    reset_ts = int(headers.get("x-ratelimit-reset", "0"))
                    reset_at = datetime.fromtimestamp(reset_ts, tz=UTC) if reset_ts else None
                    return GitHubRateLimitError(
                        f"Failed to {action}: GitHub rate limit exceeded",
                        reset_at=reset_at,
                    )
            return GitHubClientError(f"Failed to {action}: access forbidden: {error}")
        elif status == 404:
            return GitHubNotFoundError(f"Failed to {action}: not found")
        else:
            return GitHubClientError(f"Failed to {action}: GitHub API error ({status}): {error}")
