"""Pydantic schemas for parsing GitHub API responses.

These schemas map directly to the GitHub REST API response structure and
only declare the fields the sync reads. Unknown fields are ignored; the
verbatim payload is kept on disk separately for provenance.
See: https://docs.github.com/en/rest/pulls/pulls
     https://docs.github.com/en/rest/issues/comments
"""

from pydantic import BaseModel, ConfigDict, Field


class GitHubModel(BaseModel):
    """Base for GitHub payload schemas."""

    model_config = ConfigDict(extra="ignore")


class GitHubUser(GitHubModel):
    """GitHub user object from API responses."""

    login: str = Field(description="GitHub username")
    id: int | None = Field(default=None, description="GitHub user ID")


class GitHubLabel(GitHubModel):
    """GitHub label object from API responses."""

    name: str = Field(description="Label name")
    id: int | None = Field(default=None, description="Label ID")


class GitHubRepository(GitHubModel):
    """Repository object nested in a pull request branch."""

    name: str | None = Field(default=None, description="Repository name")
    clone_url: str | None = Field(default=None, description="HTTPS clone URL")


class GitHubBranch(GitHubModel):
    """Head or base branch of a pull request."""

    ref: str = Field(default="", description="Branch name")
    sha: str = Field(default="", description="Commit SHA the branch points at")
    user: GitHubUser | None = Field(default=None, description="Owner of the branch repo")
    repo: GitHubRepository | None = Field(
        default=None, description="Branch repository (None if the fork was deleted)"
    )


class GitHubPullRequest(GitHubModel):
    """GitHub Pull Request object from API.

    Maps to: GET /repos/{owner}/{repo}/pulls/{number}
    """

    id: int = Field(description="Provider-assigned PR identity")
    number: int = Field(description="PR number")
    html_url: str | None = Field(default=None, description="GitHub PR URL")
    head: GitHubBranch = Field(description="Source branch")
    base: GitHubBranch = Field(description="Target branch")
    labels: list[GitHubLabel] = Field(default_factory=list, description="PR labels")


class GitHubComment(GitHubModel):
    """GitHub issue comment object.

    Maps to: GET /repos/{owner}/{repo}/issues/{number}/comments
    """

    id: int = Field(description="Comment ID")
    body: str | None = Field(default=None, description="Comment body")
    user: GitHubUser | None = Field(default=None, description="Comment author")

    @property
    def text(self) -> str:
        """Comment body, empty string when GitHub sent none."""
        return self.body or ""

    @property
    def author(self) -> str:
        """Login of the comment author, empty when unknown."""
        return self.user.login if self.user else ""
