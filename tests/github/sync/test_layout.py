"""Tests for snapshot paths and JSON helpers."""

import pytest

from pullrequest_sync.github.sync.layout import (
    SnapshotDecodeError,
    SnapshotLayout,
    read_json,
    read_model,
    write_json,
    write_model,
)
from pullrequest_sync.schemas import Label, PullRequest


class TestSnapshotLayout:
    """Tests for SnapshotLayout paths."""

    def test_paths(self, tmp_path):
        layout = SnapshotLayout(tmp_path)

        assert layout.pr_file == tmp_path / "pr.json"
        assert layout.raw_dir == tmp_path / "github"
        assert layout.raw_pr_file == tmp_path / "github" / "pr.json"
        assert layout.comments_dir == tmp_path / "github" / "comments"
        assert layout.comment_file(42) == tmp_path / "github" / "comments" / "42.json"

    def test_ensure_dirs_is_repeatable(self, tmp_path):
        layout = SnapshotLayout(tmp_path / "new")
        layout.ensure_dirs()
        layout.ensure_dirs()

        assert layout.comments_dir.is_dir()


class TestJSONHelpers:
    """Tests for deterministic JSON I/O."""

    def test_write_json_format(self, tmp_path):
        path = tmp_path / "x.json"
        write_json(path, {"b": 1, "a": "é"})

        assert path.read_text(encoding="utf-8") == '{\n  "b": 1,\n  "a": "é"\n}\n'
        assert read_json(path) == {"b": 1, "a": "é"}

    def test_read_json_invalid(self, tmp_path):
        path = tmp_path / "x.json"
        path.write_text("{")

        with pytest.raises(SnapshotDecodeError) as exc_info:
            read_json(path)
        assert str(path) in str(exc_info.value)

    def test_read_json_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_json(tmp_path / "missing.json")

    def test_model_round_trip(self, tmp_path):
        path = tmp_path / "pr.json"
        pr = PullRequest(id=3, labels=[Label(text="bug")])

        write_model(path, pr)

        assert path.read_text().endswith("}\n")
        assert '"Labels"' in path.read_text()
        assert read_model(path, PullRequest) == pr

    def test_read_model_invalid(self, tmp_path):
        path = tmp_path / "pr.json"
        path.write_text('{"ID": "x"}')

        with pytest.raises(SnapshotDecodeError):
            read_model(path, PullRequest)

    def test_read_not_utf8(self, tmp_path):
        """Undecodable bytes surface as a decode error naming the file."""
        path = tmp_path / "pr.json"
        path.write_bytes(b'{"Labels": [{"Text": "\xff"}]}')

        for read in (read_json, lambda p: read_model(p, PullRequest)):
            with pytest.raises(SnapshotDecodeError) as exc_info:
                read(path)
            assert exc_info.value.path == path
