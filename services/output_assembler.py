from __future__ import annotations

from typing import Iterable, List, Optional

from models import DashboardContext, EnrichmentResult, Failure, FailureKind, GeneratedProfile
from services.prompts import FALLBACK_DISCLOSURE


ACQUISITION_KINDS = {
    FailureKind.TRANSPORT,
    FailureKind.HTTP,
    FailureKind.API,
    FailureKind.TOO_SHORT,
    FailureKind.LOGIN_PAGE,
    FailureKind.ERROR_PAGE,
    FailureKind.MALFORMED_UPSTREAM,
}


def dedupe_skills(*groups: Optional[Iterable[str]]) -> List[str]:
    """Concatenate skill lists, dropping blanks and exact (case-sensitive) repeats."""
    seen = set()
    out: List[str] = []
    for group in groups:
        for skill in group or []:
            value = (skill or "").strip()
            if value and value not in seen:
                seen.add(value)
                out.append(value)
    return out


def _clean_items(items: Optional[Iterable[str]]) -> Optional[List[str]]:
    if items is None:
        return None
    return [i.strip() for i in items if i and i.strip()]


def assemble_primary(
    generated: GeneratedProfile,
    dashboard: DashboardContext,
    analyzed_username: str,
) -> EnrichmentResult:
    """Primary result; dashboard skills complement, never replace, generated ones."""
    return EnrichmentResult(
        bio_suggestion=generated.bio_suggestion.strip(),
        skill_suggestions=dedupe_skills(generated.skill_suggestions, dashboard.skills),
        tech_stack=dedupe_skills(generated.tech_stack) if generated.tech_stack is not None else None,
        flagged_items=_clean_items(generated.flagged_items),
        analyzed_username=analyzed_username,
    )


def assemble_fallback(
    generated: GeneratedProfile,
    dashboard: DashboardContext,
    failure: Failure,
    analyzed_username: str,
) -> EnrichmentResult:
    """Dashboard-only result: skills are exactly the declared ones, bio discloses its basis."""
    bio = generated.bio_suggestion.strip()
    if not bio.lower().startswith(FALLBACK_DISCLOSURE.lower()):
        bio = f"{FALLBACK_DISCLOSURE}: {bio}"
    return EnrichmentResult(
        bio_suggestion=bio,
        skill_suggestions=dedupe_skills(dashboard.skills),
        flagged_items=[f"GitHub profile not analyzed. {failure.label}: {failure.detail}"],
        analyzed_username=analyzed_username,
    )


def explain_failure(
    failure: Failure,
    analyzed_username: str,
    dashboard: Optional[DashboardContext] = None,
    fallback_failure: Optional[Failure] = None,
) -> EnrichmentResult:
    """Terminal result when nothing could be generated. Names the category and the diagnostic detail."""
    dashboard = dashboard or DashboardContext()
    if failure.kind == FailureKind.RESOLUTION:
        bio = f"{failure.label}. {failure.detail}"
    elif failure.kind in ACQUISITION_KINDS:
        bio = (
            f"Failed to fetch GitHub profile content for {analyzed_username}. "
            f"{failure.label}. Tool error: {failure.as_sentinel()}"
        )
        if fallback_failure is not None:
            bio += (
                f" A bio based on your dashboard inputs could not be generated either "
                f"({fallback_failure.label}: {fallback_failure.detail})."
            )
        elif dashboard.is_empty():
            bio += (
                " There is insufficient information to generate a bio suggestion: "
                "no dashboard skills or projects were provided."
            )
    else:
        bio = f"Could not generate a bio suggestion for {analyzed_username}. {failure.label}: {failure.detail}"

    tech_stack = None
    if failure.kind == FailureKind.API:
        # Shortlisting contract: tech stack always present, API detail flagged verbatim
        flagged = [f"API Error: {failure.detail}"]
        tech_stack = []
    else:
        flagged = [f"{failure.label}: {failure.detail}"]
    if fallback_failure is not None:
        flagged.append(f"{fallback_failure.label}: {fallback_failure.detail}")
    return EnrichmentResult(
        bio_suggestion=bio,
        skill_suggestions=[],
        tech_stack=tech_stack,
        flagged_items=flagged,
        analyzed_username=analyzed_username,
    )
