from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


SENTINEL_PREFIX = "TOOL_ERROR"


class FailureKind(str, Enum):
    RESOLUTION = "resolution"
    TRANSPORT = "transport"
    HTTP = "http"
    API = "api"
    TOO_SHORT = "too_short"
    LOGIN_PAGE = "login_page"
    ERROR_PAGE = "error_page"
    MALFORMED_UPSTREAM = "malformed_upstream"
    INVALID_REQUEST = "invalid_request"
    GENERATION = "generation"
    INTERNAL = "internal"


LABELS: dict[FailureKind, str] = {
    FailureKind.RESOLUTION: "Invalid GitHub profile URL",
    FailureKind.TRANSPORT: "Network error",
    FailureKind.HTTP: "HTTP error",
    FailureKind.API: "GitHub API error",
    FailureKind.TOO_SHORT: "Content too short",
    FailureKind.LOGIN_PAGE: "Login page detected",
    FailureKind.ERROR_PAGE: "Error page detected",
    FailureKind.MALFORMED_UPSTREAM: "Malformed upstream response",
    FailureKind.INVALID_REQUEST: "Invalid enrichment request",
    FailureKind.GENERATION: "Generation failed",
    FailureKind.INTERNAL: "Unexpected error",
}


class Failure(BaseModel):
    """Why a run could not use its primary source (or could not finish at all)."""

    kind: FailureKind
    detail: str

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return LABELS[self.kind]

    def as_sentinel(self) -> str:
        """Legacy ``TOOL_ERROR: ...`` rendering, for human-readable text only."""
        return f"{SENTINEL_PREFIX}: {self.detail}"
