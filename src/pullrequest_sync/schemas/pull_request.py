"""Provider-agnostic pull request model.

This is the record written to ``<dir>/pr.json`` on download and read back
on upload. Keys are serialized in the ``Type``/``ID``/``Comments`` form that
pipeline steps consume; snake_case names are accepted on input too.

Only ``Labels`` and the ``Text`` of comments (plus adding or removing whole
comments) are acted on by an upload. ``ID``, ``Raw`` and ``Author`` are
output-only: the download fills them in and the upload treats them as
identity information.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROVIDER_GITHUB = "github"


class GenericModel(BaseModel):
    """Base class for the on-disk generic schema."""

    model_config = ConfigDict(populate_by_name=True)


class GitReference(GenericModel):
    """A branch position captured at download time."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    repo: str = Field(default="", alias="Repo", description="Clone URL of the repository")
    branch: str = Field(default="", alias="Branch", description="Branch name")
    sha: str = Field(default="", alias="SHA", description="Commit the branch pointed at")


class Label(GenericModel):
    """A pull request label. Labels have no identity beyond their text."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = Field(alias="Text")

    @field_validator("text", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value: object) -> object:
        return "" if value is None else value


class Comment(GenericModel):
    """A pull request comment.

    A comment with ``id == 0`` has not been created on the provider yet.
    """

    text: str = Field(default="", alias="Text", description="Desired comment body")

    # Output only.
    author: str = Field(default="", alias="Author", description="Provider-reported author")
    id: int = Field(default=0, alias="ID", description="Provider comment ID, 0 if new")
    raw: str | None = Field(default=None, alias="Raw", description="Path of the raw payload")

    @field_validator("text", "author", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("id", mode="before")
    @classmethod
    def _null_id_is_new(cls, value: object) -> object:
        return 0 if value is None else value

    @property
    def is_new(self) -> bool:
        """True if the comment was authored locally and not yet uploaded."""
        return self.id == 0


class PullRequest(GenericModel):
    """Generic pull request record."""

    type: str = Field(default=PROVIDER_GITHUB, alias="Type", description="Provider tag")
    id: int = Field(default=0, alias="ID", description="Provider-assigned PR identity")
    head: GitReference | None = Field(default=None, alias="Head")
    base: GitReference | None = Field(default=None, alias="Base")
    comments: list[Comment] = Field(default_factory=list, alias="Comments")
    labels: list[Label] = Field(default_factory=list, alias="Labels")
    raw: str | None = Field(default=None, alias="Raw", description="Path of the raw PR payload")

    @field_validator("comments", "labels", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: object) -> object:
        return [] if value is None else value

    def label_names(self) -> list[str]:
        """Label texts in on-disk order."""
        return [label.text for label in self.labels]
