"""On-disk layout of a downloaded pull request.

    <dir>/pr.json                          generic PullRequest record
    <dir>/<provider>/pr.json               verbatim PR payload
    <dir>/<provider>/comments/<id>.json    verbatim comment payload

JSON is written with a fixed indent and a trailing newline so that two
downloads of the same provider state produce identical bytes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pullrequest_sync.schemas import PROVIDER_GITHUB

ModelT = TypeVar("ModelT", bound=BaseModel)

PR_FILE = "pr.json"
COMMENTS_DIR = "comments"


class SnapshotDecodeError(Exception):
    """Raised when a file in the snapshot directory is not valid JSON for its schema."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not decode {path}: {reason}")
        self.path = path


@dataclass(frozen=True)
class SnapshotLayout:
    """Paths of a pull request snapshot rooted at ``root``."""

    root: Path
    provider: str = PROVIDER_GITHUB

    @property
    def pr_file(self) -> Path:
        return self.root / PR_FILE

    @property
    def raw_dir(self) -> Path:
        return self.root / self.provider

    @property
    def raw_pr_file(self) -> Path:
        return self.raw_dir / PR_FILE

    @property
    def comments_dir(self) -> Path:
        return self.raw_dir / COMMENTS_DIR

    def comment_file(self, comment_id: int) -> Path:
        """Raw payload path for a comment."""
        return self.comments_dir / f"{comment_id}.json"

    def ensure_dirs(self) -> None:
        """Create the raw payload directories."""
        self.comments_dir.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: Any) -> None:
    """Write a JSON document, replacing any previous content."""
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def read_json(path: Path) -> Any:
    """Read a JSON document.

    Raises:
        SnapshotDecodeError: If the file is not valid UTF-8 JSON
        OSError: If the file cannot be read
    """
    data = path.read_bytes()
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotDecodeError(path, str(e)) from e


def write_model(path: Path, model: BaseModel) -> None:
    """Write a pydantic model using its on-disk (alias) key names."""
    path.write_text(model.model_dump_json(by_alias=True, indent=2) + "\n", encoding="utf-8")


def read_model(path: Path, model_cls: type[ModelT]) -> ModelT:
    """Read and validate a pydantic model from a JSON file.

    Raises:
        SnapshotDecodeError: If the file is malformed or fails validation
        OSError: If the file cannot be read
    """
    data = path.read_bytes()
    try:
        return model_cls.model_validate_json(data.decode("utf-8"))
    except (UnicodeDecodeError, ValidationError) as e:
        raise SnapshotDecodeError(path, str(e)) from e
