from __future__ import annotations

import os


# Central routing for generation use-cases. Edit here to change per-operation defaults.
# Per-route models can be overridden via env vars for quick testing.
#
# Keys are use_case identifiers consumed by services/llm_client.py
ROUTES: dict[str, dict] = {
    # Bio + skill suggestions from the scraped profile page (primary, page strategy)
    "profile_enhancement": {
        "provider": os.getenv("LLM_PROFILE_PROVIDER", "openai"),
        "model": os.getenv("OPENAI_MODEL_PROFILE"),  # falls back to global OPENAI_MODEL
        "temperature": 0.4,
        # Logical operation name for logging (not a vendor API name)
        "operation": "profile_enhancement",
    },
    # Recruiter summary from GitHub API data (primary, api strategy)
    "candidate_shortlisting": {
        "provider": os.getenv("LLM_SHORTLIST_PROVIDER", "openai"),
        "model": os.getenv("OPENAI_MODEL_SHORTLIST"),
        "temperature": 0.2,
        "operation": "candidate_shortlisting",
    },
    # Dashboard-only bio when the external source is unusable
    "dashboard_fallback": {
        "provider": os.getenv("LLM_FALLBACK_PROVIDER", "openai"),
        "model": os.getenv("OPENAI_MODEL_FALLBACK"),
        "temperature": 0.4,
        "operation": "dashboard_fallback",
    },
}
