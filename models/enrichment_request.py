from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models.dashboard_context import DashboardContext, DashboardProject


class EnrichmentRequest(BaseModel):
    """Pipeline input contract as sent by the dashboard UI."""

    profile_url: str = Field(alias="profileUrl")
    dashboard_skills: list[str] | None = Field(default=None, alias="dashboardSkills")
    dashboard_projects: list[DashboardProject] | None = Field(default=None, alias="dashboardProjects")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @property
    def dashboard(self) -> DashboardContext:
        skills = [s.strip() for s in (self.dashboard_skills or []) if s and s.strip()]
        return DashboardContext(skills=skills, projects=list(self.dashboard_projects or []))
