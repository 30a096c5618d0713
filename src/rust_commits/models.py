"""
Data models for the commits API.

These mirror the JSON payloads returned by the commits website and are
immutable once parsed.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommitUser(BaseModel):
    """The author of a commit."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="", description="Display name of the author")
    avatar: str = Field(default="", description="Avatar URL of the author")


class Commit(BaseModel):
    """A single commit entry."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Unique commit ID")
    branch: str = Field(default="", description="Full branch path")
    changeset: str = Field(default="", description="Changeset ID")
    created: datetime | None = Field(default=None, description="Creation time")
    likes: int = Field(default=0, description="Like count")
    dislikes: int = Field(default=0, description="Dislike count")
    message: str = Field(default="", description="Commit message")
    user: CommitUser = Field(
        default_factory=CommitUser, description="Author of the commit"
    )

    @field_validator("user", mode="before")
    @classmethod
    def parse_user(cls, v: object) -> object:
        """Treat a missing author as anonymous."""
        return {} if v is None else v


class CommitResult(BaseModel):
    """One page of commits as returned by the API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    total: int = Field(default=0, description="Total number of commits")
    results: list[Commit] = Field(default_factory=list, description="Commits")

    @field_validator("results", mode="before")
    @classmethod
    def parse_results(cls, v: object) -> object:
        """Treat a null result list as empty."""
        return [] if v is None else v
