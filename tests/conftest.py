"""Pytest configuration and shared fixtures.

Usage Guide:
- For provider payloads: import factories from tests.factories
- For service tests: use the ``fake_github`` fixture (in-memory provider)
- For githubkit wrapper tests: patch ``pullrequest_sync.github.client.GitHub``
"""

from pathlib import Path

import pytest

from pullrequest_sync.config import get_settings
from pullrequest_sync.schemas import PullRequestRef
from tests.factories import make_github_comment, make_github_pr
from tests.fakes import FakeGitHub

# -----------------------------------------------------------------------------
# Test Constants
#
# Mirror a fork PR: "baz" opened feature -> foo/bar:master.
# -----------------------------------------------------------------------------
OWNER = "foo"
REPO = "bar"
PR_NUMBER = 1
PR_ID = 1001
PR_URL = f"https://github.com/{OWNER}/{REPO}/pull/{PR_NUMBER}"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached process-wide; each test starts from a clean read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pr_ref() -> PullRequestRef:
    """Coordinates of the test pull request."""
    return PullRequestRef(owner=OWNER, repo=REPO, number=PR_NUMBER)


@pytest.fixture
def pr_payload() -> dict:
    """Raw GitHub payload of the test pull request."""
    return make_github_pr(
        id=PR_ID,
        number=PR_NUMBER,
        owner=OWNER,
        repo=REPO,
        labels=["bug", "needs-review"],
    )


@pytest.fixture
def comment_payloads() -> list[dict]:
    """Raw GitHub payloads of the comments already on the test PR."""
    return [
        make_github_comment(id=1, body="hello world!", login="octocat"),
        make_github_comment(id=2, body="/retest", login="tekton-robot"),
    ]


@pytest.fixture
def fake_github(pr_payload, comment_payloads) -> FakeGitHub:
    """In-memory provider pre-populated with the test PR and its comments."""
    gh = FakeGitHub()
    gh.add_pull_request(OWNER, REPO, pr_payload)
    for comment in comment_payloads:
        gh.add_comment(OWNER, REPO, PR_NUMBER, comment)
    return gh


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    """Empty directory for a pull request snapshot."""
    path = tmp_path / "pr"
    path.mkdir()
    return path
