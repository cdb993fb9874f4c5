from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from models import DashboardContext, ProfileIdentifier, RawContent, StructuredProfile


OUTPUT_CONTRACT = (
    "Return ONLY a JSON object with keys: "
    '"bioSuggestion" (string), "skillSuggestions" (array of strings), '
    '"techStack" (array of strings, optional), "flaggedItems" (array of strings, optional).'
)

FALLBACK_DISCLOSURE = "Based on your dashboard profile"


def page_text_excerpt(html: str, max_chars: int) -> str:
    """Visible text of a fetched page, whitespace-collapsed and capped."""
    soup = BeautifulSoup(html or "", "html.parser")
    # Drop script/style
    for tag in soup(["script", "style", "noscript", "svg"]):
        tag.extract()
    text = " ".join((soup.get_text(" ") or "").split())
    return text[:max_chars]


def _dashboard_section(dashboard: DashboardContext) -> str:
    lines: List[str] = []
    if dashboard.skills:
        lines.append("Dashboard Skills Provided:")
        lines.extend(f"- {skill}" for skill in dashboard.skills)
    else:
        lines.append("Dashboard Skills Provided: None")
    if dashboard.projects:
        lines.append("Dashboard Projects Provided:")
        for project in dashboard.projects:
            lines.append(f"- Project Title: {project.title}")
            if project.description:
                lines.append(f"  Project Description: {project.description}")
    else:
        lines.append("Dashboard Projects Provided: None")
    return "\n".join(lines)


def build_page_prompt(
    identifier: ProfileIdentifier,
    content: RawContent,
    dashboard: DashboardContext,
    excerpt_chars: int,
) -> str:
    excerpt = page_text_excerpt(content.text, excerpt_chars)
    return f"""You are an AI assistant helping developers enhance their GitTalent profile.
Analyze the developer's GitHub profile content AND their self-declared dashboard information.

Information sources:
1. GitHub Profile Content (text of {identifier.profile_url}): the primary source for coding activity and public projects.
2. Dashboard Skills and Projects: what the user explicitly listed on their GitTalent profile.

GitHub username: {identifier.username}

GitHub Profile Content (visible text, truncated):
{excerpt}

{_dashboard_section(dashboard)}

Generate:
1. bioSuggestion: a concise, engaging professional bio of 2-3 sentences written in the first person.
   - Prioritize the GitHub content for technical achievements and activity.
   - Use dashboard skills to highlight what the user wants to emphasize and dashboard projects where they add value.
   - If all sources are insufficient for a meaningful bio, state: "Could not generate a bio suggestion due to limited information from your GitHub profile and dashboard inputs."
2. skillSuggestions: key technical skills, derived primarily from the GitHub content (repository languages, READMEs, bio text),
   consolidated with the dashboard skills without redundancy. Empty if nothing specific can be identified.

Only use facts present in the sources above. {OUTPUT_CONTRACT}"""


def _repository_lines(profile: StructuredProfile) -> List[str]:
    if not profile.repositories:
        return ["No public repositories found or provided."]
    lines: List[str] = []
    for repo in profile.repositories:
        lines.append(f"- Name: {repo.name} ({repo.language or 'N/A'})")
        lines.append(f"  Stars: {repo.stargazers_count}")
        lines.append(f"  Description: {repo.description or 'No description.'}")
        lines.append(f"  Last Updated: {repo.updated_at or 'unknown'}")
        lines.append(f"  URL: {repo.html_url}")
    return lines


def build_api_prompt(
    identifier: ProfileIdentifier,
    profile: StructuredProfile,
    dashboard: DashboardContext,
) -> str:
    repos = "\n".join(_repository_lines(profile))
    dashboard_block = "" if dashboard.is_empty() else f"\n{_dashboard_section(dashboard)}\n"
    return f"""You are an AI-powered recruiting assistant.
Analyze structured data from a candidate's GitHub profile (obtained via the GitHub API) to help a recruiter screen them.

GitHub Profile Data:
Username: {profile.username or identifier.username}
Name: {profile.display_name or 'Not provided'}
Bio: {profile.bio or 'Not provided'}
Location: {profile.location or 'Not provided'}
Public Repositories Count: {profile.public_repo_count}
Followers: {profile.followers}
Following: {profile.following}

Repositories (up to {len(profile.repositories)} non-forked, most recently updated first):
{repos}
{dashboard_block}
Based only on the data above:
- bioSuggestion: a concise summary of the candidate. Highlight their bio (if available), skills suggested by repository
  languages and descriptions, and standout projects (consider stars and recency). Mention a missing bio or few repositories.
- skillSuggestions: distinct technical skills evidenced by the data.
- techStack: distinct programming languages and technologies named in repository languages or inferable from names/descriptions.
  Empty if none can be identified confidently.
- flaggedItems: 2-3 noteworthy items, positive or areas for attention (e.g. "Owns a highly starred repository: NAME (Stars: N)",
  "Limited public repository activity."). If nothing stands out, a single item "Profile data appears standard."

{OUTPUT_CONTRACT}"""


def build_fallback_prompt(identifier: ProfileIdentifier, dashboard: DashboardContext) -> str:
    return f"""You are an AI assistant helping a developer ({identifier.username}) write their GitTalent profile bio.
Their external profile could not be used, so work ONLY from the self-declared dashboard information below.
Do not mention, guess at, or describe GitHub, repositories, or any external profile content, and do not invent skills.

{_dashboard_section(dashboard)}

Generate:
- bioSuggestion: 2-3 sentences in the first person. Begin with "{FALLBACK_DISCLOSURE}," to make clear it is based only on
  self-declared information.
- skillSuggestions: exactly the dashboard skills listed above, unchanged.

{OUTPUT_CONTRACT}"""
