from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ProfileIdentifier(BaseModel):
    """Resolved username, the URL it was taken from and the canonical profile URL.

    Lives for one run.
    """

    username: str
    source_url: str
    profile_url: str

    model_config = ConfigDict(frozen=True)


class ResolutionError(BaseModel):
    """Returned (not raised) when a URL does not name a profile."""

    original_input: str
    reason: str

    model_config = ConfigDict(frozen=True)

    def describe(self) -> str:
        return f"Could not extract a username from '{self.original_input}': {self.reason}"
