from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DashboardProject(BaseModel):
    title: str
    description: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class DashboardContext(BaseModel):
    """Skills and projects the developer declared on their dashboard. Read-only."""

    skills: list[str] = Field(default_factory=list)
    projects: list[DashboardProject] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def is_empty(self) -> bool:
        return not self.skills and not self.projects
