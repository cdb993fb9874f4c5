from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeneratedProfile(BaseModel):
    """Structured output requested from the generation capability."""

    bio_suggestion: str = Field(alias="bioSuggestion")
    skill_suggestions: list[str] = Field(default_factory=list, alias="skillSuggestions")
    tech_stack: list[str] | None = Field(default=None, alias="techStack")
    flagged_items: list[str] | None = Field(default=None, alias="flaggedItems")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("bio_suggestion")
    @classmethod
    def _bio_not_blank(cls, value: str) -> str:
        # A blank bio counts as "returned nothing"
        value = value.strip()
        if not value:
            raise ValueError("bioSuggestion is empty")
        return value


class EnrichmentResult(BaseModel):
    """Final pipeline output. Exactly one per run; never mutated after assembly."""

    bio_suggestion: str = Field(alias="bioSuggestion")
    skill_suggestions: list[str] = Field(default_factory=list, alias="skillSuggestions")
    tech_stack: list[str] | None = Field(default=None, alias="techStack")
    flagged_items: list[str] | None = Field(default=None, alias="flaggedItems")
    analyzed_username: str | None = Field(default=None, alias="analyzedUsername")

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    def to_contract(self) -> dict:
        """camelCase dict matching the public output contract, optional keys omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
