"""Tests for PullRequestDownloader."""

import json

import pytest

from pullrequest_sync.github.exceptions import GitHubClientError, GitHubNotFoundError
from pullrequest_sync.github.sync import PullRequestDownloader
from pullrequest_sync.schemas import PullRequest, PullRequestRef
from tests.conftest import OWNER, PR_ID, PR_NUMBER, REPO
from tests.factories import make_github_comment, make_github_pr
from tests.fakes import FakeGitHub


def read(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestDownloadLayout:
    """Tests for the files a download writes."""

    async def test_writes_generic_record(self, fake_github, pr_ref, snapshot_dir):
        """pr.json holds the provider-agnostic record."""
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        raw_pr_path = snapshot_dir / "github" / "pr.json"
        data = read(snapshot_dir / "pr.json")

        assert data == {
            "Type": "github",
            "ID": PR_ID,
            "Head": {
                "Repo": "https://github.com/baz/bar.git",
                "Branch": "feature",
                "SHA": "2",
            },
            "Base": {
                "Repo": "https://github.com/foo/bar.git",
                "Branch": "master",
                "SHA": "1",
            },
            "Comments": [
                {
                    "Text": "hello world!",
                    "Author": "octocat",
                    "ID": 1,
                    "Raw": str(snapshot_dir / "github" / "comments" / "1.json"),
                },
                {
                    "Text": "/retest",
                    "Author": "tekton-robot",
                    "ID": 2,
                    "Raw": str(snapshot_dir / "github" / "comments" / "2.json"),
                },
            ],
            "Labels": [{"Text": "bug"}, {"Text": "needs-review"}],
            "Raw": str(raw_pr_path),
        }

    async def test_raw_payloads_are_verbatim(
        self, fake_github, pr_ref, snapshot_dir, pr_payload, comment_payloads
    ):
        """Raw paths recorded in pr.json open to exactly what GitHub returned."""
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)
        pr = PullRequest.model_validate_json((snapshot_dir / "pr.json").read_text())

        assert pr.raw is not None
        assert read(snapshot_dir / pr.raw) == pr_payload
        for comment, payload in zip(pr.comments, comment_payloads, strict=True):
            assert comment.raw is not None
            assert read(snapshot_dir / comment.raw) == payload

    async def test_result(self, fake_github, pr_ref, snapshot_dir):
        """DownloadResult summarizes what was written."""
        result = await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        assert result.ref == pr_ref
        assert result.path == snapshot_dir / "pr.json"
        assert result.pr_id == PR_ID
        assert result.labels == ["bug", "needs-review"]
        assert result.comment_ids == [1, 2]
        assert result.to_dict()["comments"] == 2

    async def test_creates_missing_directory(self, fake_github, pr_ref, tmp_path):
        """The snapshot directory is created if needed."""
        target = tmp_path / "nested" / "workspace"
        await PullRequestDownloader(fake_github, pr_ref).download(target)

        assert (target / "pr.json").is_file()
        assert (target / "github" / "comments").is_dir()

    async def test_only_reads(self, fake_github, pr_ref, snapshot_dir):
        """Download never calls a mutating endpoint."""
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)
        assert fake_github.mutations() == []


class TestDownloadMapping:
    """Tests for provider → generic mapping edge cases."""

    async def test_no_comments_no_labels(self, snapshot_dir):
        """A bare PR yields empty lists, not nulls."""
        gh = FakeGitHub()
        gh.add_pull_request(OWNER, REPO, make_github_pr(id=9, number=3))
        await PullRequestDownloader(gh, PullRequestRef(OWNER, REPO, 3)).download(snapshot_dir)

        data = read(snapshot_dir / "pr.json")
        assert data["Comments"] == []
        assert data["Labels"] == []
        assert list((snapshot_dir / "github" / "comments").iterdir()) == []

    async def test_duplicate_labels_preserved(self, fake_github, pr_ref, snapshot_dir):
        """Labels keep provider order and duplicates."""
        fake_github.pulls[(OWNER, REPO, PR_NUMBER)]["labels"] = [
            {"name": "b"},
            {"name": "a"},
            {"name": "b"},
        ]
        result = await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)
        assert result.labels == ["b", "a", "b"]

    async def test_deleted_fork(self, fake_github, pr_ref, snapshot_dir):
        """A head branch whose repository is gone maps to an empty Repo."""
        fake_github.pulls[(OWNER, REPO, PR_NUMBER)] = make_github_pr(
            id=PR_ID, number=PR_NUMBER, deleted_head_repo=True
        )
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        head = read(snapshot_dir / "pr.json")["Head"]
        assert head == {"Repo": "", "Branch": "feature", "SHA": "2"}

    async def test_null_comment_body_and_user(self, fake_github, pr_ref, snapshot_dir):
        """Comments with no body or user map to empty strings."""
        fake_github.comments[(OWNER, REPO, PR_NUMBER)] = [{"id": 5, "body": None, "user": None}]
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        comment = read(snapshot_dir / "pr.json")["Comments"][0]
        assert comment["Text"] == ""
        assert comment["Author"] == ""

    async def test_unicode_kept(self, fake_github, pr_ref, snapshot_dir):
        """Non-ASCII comment text survives unchanged."""
        fake_github.comments[(OWNER, REPO, PR_NUMBER)] = [
            make_github_comment(id=3, body="LGTM 👍 ça marche")
        ]
        await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        assert read(snapshot_dir / "pr.json")["Comments"][0]["Text"] == "LGTM 👍 ça marche"


class TestDownloadIdempotence:
    """Tests for repeated downloads."""

    async def test_rerun_is_byte_identical(self, fake_github, pr_ref, snapshot_dir):
        """Downloading unchanged state twice yields identical files."""
        downloader = PullRequestDownloader(fake_github, pr_ref)
        await downloader.download(snapshot_dir)
        first = {p: p.read_bytes() for p in snapshot_dir.rglob("*.json")}

        await downloader.download(snapshot_dir)
        second = {p: p.read_bytes() for p in snapshot_dir.rglob("*.json")}

        assert first == second

    async def test_overwrites_edited_record(self, fake_github, pr_ref, snapshot_dir):
        """Local edits are discarded, not merged."""
        downloader = PullRequestDownloader(fake_github, pr_ref)
        await downloader.download(snapshot_dir)
        (snapshot_dir / "pr.json").write_text('{"Type": "github", "Labels": [{"Text": "x"}]}')

        await downloader.download(snapshot_dir)

        assert read(snapshot_dir / "pr.json")["Labels"] == [
            {"Text": "bug"},
            {"Text": "needs-review"},
        ]


class TestDownloadErrors:
    """Tests for failure propagation."""

    async def test_missing_pr_raises(self, fake_github, snapshot_dir):
        """A 404 from GitHub aborts before the record is written."""
        ref = PullRequestRef(OWNER, REPO, 999)
        with pytest.raises(GitHubNotFoundError):
            await PullRequestDownloader(fake_github, ref).download(snapshot_dir)
        assert not (snapshot_dir / "pr.json").exists()

    async def test_comment_failure_keeps_partial_files(self, fake_github, pr_ref, snapshot_dir):
        """Files written before a failure are not rolled back."""
        fake_github.fail_on("list_comments")
        with pytest.raises(GitHubClientError):
            await PullRequestDownloader(fake_github, pr_ref).download(snapshot_dir)

        assert (snapshot_dir / "github" / "pr.json").exists()
        assert not (snapshot_dir / "pr.json").exists()
