"""Pull request URL resolution.

Turns a pull request URL into the (owner, repo, number) triple used to
address the provider API. The scheme and host are never checked, so
``https://github.com/o/r/pull/1``, ``ssh://github.com/o/r/pulls/1`` and
``https://ghe.example.com/o/r/pull/1/files`` all resolve to ``o/r#1``.
"""

from dataclasses import dataclass
from urllib.parse import urlparse

# "", owner, repo, <category>, number
_PATH_SEGMENTS = 5


class PullRequestURLError(ValueError):
    """Base exception for URLs that do not identify a pull request."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class EmptyPullRequestURLError(PullRequestURLError):
    """Raised when no URL was supplied."""


class MalformedPullRequestURLError(PullRequestURLError):
    """Raised when the URL path does not have the owner/repo/category/number shape."""


class InvalidPullRequestNumberError(PullRequestURLError):
    """Raised when the PR number position does not hold a number."""


@dataclass(frozen=True)
class PullRequestRef:
    """Provider coordinates of a single pull request."""

    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        """Repository path in owner/name format."""
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"


def parse_pull_request_url(url: str, *, strict: bool = False) -> PullRequestRef:
    """Parse a pull request URL into its owner, repository and number.

    The path is split on ``/``: the first two segments are the owner and
    repository, the third (``pull``, ``pulls`` or anything else) is skipped
    and the fourth is the PR number. By default any further suffix such as a
    trailing slash or ``/files`` is ignored.

    Args:
        url: Pull request URL
        strict: Require the path to be exactly ``/owner/repo/<category>/<number>``

    Returns:
        PullRequestRef for the URL

    Raises:
        EmptyPullRequestURLError: If url is empty
        MalformedPullRequestURLError: If the path is too short (or, when
            strict, has trailing segments)
        InvalidPullRequestNumberError: If the number segment is not numeric
    """
    if not url or not url.strip():
        raise EmptyPullRequestURLError("Pull request URL is empty", url)

    parts = urlparse(url.strip()).path.split("/")
    if len(parts) < _PATH_SEGMENTS or (strict and len(parts) != _PATH_SEGMENTS):
        raise MalformedPullRequestURLError(f"Could not determine PR from URL: {url}", url)

    owner, repo, number = parts[1], parts[2], parts[4]
    if not owner or not repo:
        raise MalformedPullRequestURLError(f"Missing owner or repository in URL: {url}", url)
    if not (number.isascii() and number.isdigit()):
        raise InvalidPullRequestNumberError(
            f"Error parsing PR number '{number}' from URL: {url}", url
        )

    return PullRequestRef(owner=owner, repo=repo, number=int(number))
