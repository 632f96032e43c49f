"""PR Upload Service - Read snapshot → Plan → Apply to GitHub.

Reconciles a (possibly edited) generic record back into the provider:

* Labels are not diffed. The on-disk label list replaces the provider's
  label set in a single call, so an empty list clears every label.
* Comments are diffed by identity against the provider's current list.
  A provider comment missing on disk is deleted, one whose text changed is
  edited (body only) and the rest are left alone. Desired comments that
  matched nothing, chiefly new ones without an ID, are created.

Calls are issued one at a time and the first failure aborts the upload.
Nothing already sent is rolled back; re-running the upload is the recovery
path. Each created comment's new ID is written back to ``pr.json``
straight away so a re-run does not create it a second time.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pullrequest_sync.github.client import GitHubClient
from pullrequest_sync.logging import bind_pr
from pullrequest_sync.schemas import Comment, GitHubComment, PullRequest, PullRequestRef

from .enums import CommentAction
from .layout import SnapshotLayout, read_model, write_json, write_model
from .results import UploadResult


@dataclass(frozen=True)
class CommentOperation:
    """A single planned comment mutation."""

    action: CommentAction
    comment_id: int = 0
    """Provider comment ID (0 for creates)."""

    body: str | None = None
    """Body to send for creates and updates."""

    index: int | None = None
    """Position of the desired comment in the on-disk record, if any."""


@dataclass
class CommentSyncPlan:
    """Ordered comment operations that converge the provider on the desired state."""

    operations: list[CommentOperation] = field(default_factory=list)

    def ids(self, action: CommentAction) -> list[int]:
        """Provider IDs of the operations with the given action."""
        return [op.comment_id for op in self.operations if op.action == action]

    @property
    def creates(self) -> list[CommentOperation]:
        return [op for op in self.operations if op.action == CommentAction.CREATE]

    @property
    def mutations(self) -> list[CommentOperation]:
        """Operations that require a provider call."""
        return [op for op in self.operations if op.action != CommentAction.UNCHANGED]


def plan_comment_sync(desired: list[Comment], existing: list[GitHubComment]) -> CommentSyncPlan:
    """Compute the comment mutations needed to make existing match desired.

    Desired comments are indexed by ID once, so the plan is linear in the
    number of comments. Comments without an ID are never merged with each
    other: two new comments with identical text produce two creates. If the
    record holds the same ID twice, the later entry wins.

    Args:
        desired: Comments from the on-disk record
        existing: Comments currently on the provider

    Returns:
        CommentSyncPlan with deletes/updates/unchanged in provider order,
        followed by creates in on-disk order
    """
    by_id: dict[int, int] = {}
    new_indexes: list[int] = []
    for index, comment in enumerate(desired):
        if comment.is_new:
            new_indexes.append(index)
        else:
            by_id[comment.id] = index

    plan = CommentSyncPlan()
    for current in existing:
        index = by_id.pop(current.id, None)
        if index is None:
            plan.operations.append(CommentOperation(CommentAction.DELETE, comment_id=current.id))
        elif desired[index].text != current.text:
            plan.operations.append(
                CommentOperation(
                    CommentAction.UPDATE,
                    comment_id=current.id,
                    body=desired[index].text,
                    index=index,
                )
            )
        else:
            plan.operations.append(
                CommentOperation(CommentAction.UNCHANGED, comment_id=current.id, index=index)
            )

    # Unmatched IDs (e.g. deleted on the provider since download) are recreated too.
    for index in sorted([*by_id.values(), *new_indexes]):
        plan.operations.append(
            CommentOperation(CommentAction.CREATE, body=desired[index].text, index=index)
        )

    return plan


class PullRequestUploader:
    """Service for uploading an on-disk pull request back to GitHub.

    Usage:
        async with GitHubClient(token) as client:
            uploader = PullRequestUploader(client, parse_pull_request_url(url))
            result = await uploader.upload(Path("/workspace/pr"))
    """

    def __init__(self, client: GitHubClient, ref: PullRequestRef) -> None:
        """Initialize the upload service.

        Args:
            client: GitHub API client
            ref: Pull request to upload to
        """
        self._client = client
        self._ref = ref
        self._logger = bind_pr(ref.owner, ref.repo, ref.number)

    async def upload(self, path: Path, *, dry_run: bool = False) -> UploadResult:
        """Sync labels and comments from the snapshot at path to GitHub.

        Args:
            path: Snapshot directory containing pr.json
            dry_run: Compute the plan without calling any mutating endpoint
                or writing to disk

        Returns:
            UploadResult listing the applied (or planned) changes

        Raises:
            SnapshotDecodeError: If pr.json is malformed
            OSError: If pr.json cannot be read or written
            GitHubClientError: If any provider call fails
        """
        owner, repo, number = self._ref.owner, self._ref.repo, self._ref.number
        layout = SnapshotLayout(Path(path))
        self._logger.info("Syncing path: {} to PR {}", layout.root, self._ref)

        pr = read_model(layout.pr_file, PullRequest)
        pr.comments = self._drop_shadowed(pr.comments)
        result = UploadResult(ref=self._ref, labels=pr.label_names(), dry_run=dry_run)

        # Labels
        self._logger.info("Setting labels for PR {} to {}", self._ref, result.labels)
        if not dry_run:
            await self._client.replace_labels(owner, repo, number, result.labels)

        # Comments
        raw_existing = await self._client.list_comments(owner, repo, number)
        existing = [GitHubComment.model_validate(raw) for raw in raw_existing]
        plan = plan_comment_sync(pr.comments, existing)
        result.unchanged = plan.ids(CommentAction.UNCHANGED)
        self._logger.debug(
            "Comment plan for PR {}: {} mutation(s), {} unchanged",
            self._ref,
            len(plan.mutations),
            len(result.unchanged),
        )

        if dry_run:
            result.deleted = plan.ids(CommentAction.DELETE)
            result.updated = plan.ids(CommentAction.UPDATE)
            result.created = plan.ids(CommentAction.CREATE)
            for op in plan.mutations:
                self._logger.info("Dry run: would {} comment {}", op.action.value, op.comment_id)
            return result

        for op in plan.mutations:
            if op.action == CommentAction.DELETE:
                self._logger.info("Deleting comment {} for PR {}", op.comment_id, self._ref)
                await self._client.delete_comment(owner, repo, op.comment_id)
                result.deleted.append(op.comment_id)
            elif op.action == CommentAction.UPDATE:
                self._logger.info("Updating comment {} for PR {}", op.comment_id, self._ref)
                await self._client.edit_comment(owner, repo, op.comment_id, op.body or "")
                result.updated.append(op.comment_id)
            else:
                self._logger.info("Creating comment for PR {}: {!r}", self._ref, op.body)
                payload = await self._client.create_comment(owner, repo, number, op.body or "")
                created = GitHubComment.model_validate(payload)
                result.created.append(created.id)
                assert op.index is not None, "create operations always refer to a desired comment"
                self._record_created(layout, pr, op.index, created, payload)

        return result

    def _drop_shadowed(self, comments: list[Comment]) -> list[Comment]:
        """Keep only the last entry for each comment ID.

        The record written back after a create must match what was applied,
        otherwise a shadowed entry would be created on the next upload.
        """
        last_index = {c.id: i for i, c in enumerate(comments) if not c.is_new}
        kept: list[Comment] = []
        for index, comment in enumerate(comments):
            if comment.is_new or last_index[comment.id] == index:
                kept.append(comment)
            else:
                self._logger.warning(
                    "Ignoring earlier entry for duplicate comment ID {}", comment.id
                )
        return kept

    def _record_created(
        self,
        layout: SnapshotLayout,
        pr: PullRequest,
        index: int,
        created: GitHubComment,
        payload: dict[str, object],
    ) -> None:
        """Write a newly created comment's identity back to the snapshot."""
        comment_path = layout.comment_file(created.id)
        layout.ensure_dirs()
        write_json(comment_path, payload)

        comment = pr.comments[index]
        comment.id = created.id
        comment.author = created.author
        comment.raw = str(comment_path)
        self._logger.debug("Recorded comment {} in {}", created.id, layout.pr_file)
        write_model(layout.pr_file, pr)
