from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class AcquisitionErrorKind(str, Enum):
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    API_ERROR = "api_error"


class RawContent(BaseModel):
    """Page body as fetched (possibly truncated)."""

    text: str
    length: int
    content_type: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_text(cls, text: str, content_type: str | None = None) -> "RawContent":
        return cls(text=text, length=len(text), content_type=content_type)


class Repository(BaseModel):
    name: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    html_url: str
    fork: bool = False
    updated_at: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class StructuredProfile(BaseModel):
    """User fields and owned repositories from the GitHub REST API."""

    username: str
    bio: str | None = None
    display_name: str | None = Field(default=None, alias="name")
    location: str | None = None
    public_repo_count: int = Field(default=0, alias="public_repos")
    followers: int = 0
    following: int = 0
    repositories: list[Repository] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class AcquisitionError(BaseModel):
    """Tagged acquisition failure. A value, never raised."""

    kind: AcquisitionErrorKind
    detail: str
    status: int | None = None

    model_config = ConfigDict(frozen=True)


AcquisitionResult = Union[RawContent, StructuredProfile, AcquisitionError]
