"""PR Download Service - Fetch → Store raw → Build generic record.

Writes the provider's pull request and comments to a directory in the
layout described in ``layout.py``. Every run starts from scratch and
overwrites whatever is on disk; nothing is merged with a previous download.
"""

from pathlib import Path

from pullrequest_sync.github.client import GitHubClient
from pullrequest_sync.logging import bind_pr
from pullrequest_sync.schemas import (
    PROVIDER_GITHUB,
    Comment,
    GitHubBranch,
    GitHubComment,
    GitHubPullRequest,
    GitReference,
    Label,
    PullRequest,
    PullRequestRef,
)

from .layout import SnapshotLayout, write_json, write_model
from .results import DownloadResult


def _git_reference(branch: GitHubBranch) -> GitReference:
    """Map a PR head/base branch to a GitReference."""
    clone_url = branch.repo.clone_url if branch.repo else None
    return GitReference(repo=clone_url or "", branch=branch.ref, sha=branch.sha)


class PullRequestDownloader:
    """Service for downloading a pull request to disk.

    Usage:
        async with GitHubClient(token) as client:
            downloader = PullRequestDownloader(client, parse_pull_request_url(url))
            result = await downloader.download(Path("/workspace/pr"))
    """

    def __init__(self, client: GitHubClient, ref: PullRequestRef) -> None:
        """Initialize the download service.

        Args:
            client: GitHub API client
            ref: Pull request to download
        """
        self._client = client
        self._ref = ref
        self._logger = bind_pr(ref.owner, ref.repo, ref.number)

    async def download(self, path: Path) -> DownloadResult:
        """Fetch the pull request and its comments and write them under path.

        Flow:
            1. Fetch the PR, store the raw payload at <path>/github/pr.json
            2. Map branches and labels into the generic record
            3. Fetch comments, store each raw payload at
               <path>/github/comments/<id>.json and add it to the record
            4. Write the generic record to <path>/pr.json

        Args:
            path: Snapshot directory (created if missing)

        Returns:
            DownloadResult describing what was written

        Raises:
            GitHubClientError: If any provider call fails
            OSError: If a directory or file cannot be written

        Note:
            Files written before a failure are left in place.
        """
        owner, repo, number = self._ref.owner, self._ref.repo, self._ref.number
        layout = SnapshotLayout(Path(path), provider=PROVIDER_GITHUB)
        layout.ensure_dirs()

        # Step 1: Pull request
        raw_pr = await self._client.get_pull_request(owner, repo, number)
        self._logger.debug("Writing raw pull request to file: {}", layout.raw_pr_file)
        write_json(layout.raw_pr_file, raw_pr)

        # Step 2: Generic record
        gh_pr = GitHubPullRequest.model_validate(raw_pr)
        pr = PullRequest(
            type=PROVIDER_GITHUB,
            id=gh_pr.id,
            head=_git_reference(gh_pr.head),
            base=_git_reference(gh_pr.base),
            labels=[Label(text=label.name) for label in gh_pr.labels],
            raw=str(layout.raw_pr_file),
        )

        # Step 3: Comments
        raw_comments = await self._client.list_comments(owner, repo, number)
        for raw_comment in raw_comments:
            gh_comment = GitHubComment.model_validate(raw_comment)
            comment_path = layout.comment_file(gh_comment.id)
            self._logger.info("Writing comment {} to file: {}", gh_comment.id, comment_path)
            write_json(comment_path, raw_comment)
            pr.comments.append(
                Comment(
                    id=gh_comment.id,
                    author=gh_comment.author,
                    text=gh_comment.text,
                    raw=str(comment_path),
                )
            )

        # Step 4: Generic record
        self._logger.info("Writing pull request to file: {}", layout.pr_file)
        write_model(layout.pr_file, pr)

        return DownloadResult(
            ref=self._ref,
            path=layout.pr_file,
            pr_id=pr.id,
            labels=pr.label_names(),
            comment_ids=[comment.id for comment in pr.comments],
        )
