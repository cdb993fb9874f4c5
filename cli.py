import argparse
import json
import os
import uuid as _uuid
from pathlib import Path
from typing import List, Optional, Type

from config.settings import get_settings
from models import DashboardProject, EnrichmentRequest, GeneratedProfile, RawContent
from ports.generation import T
from services.content_validator import ContentValidator
from services.enrichment_service import shortlist_candidate, suggest_profile_enhancements
from sources.registry import available_sources
from utils.logging_setup import init_logging


class _StubGenerator:
    # Canned generator; replaces the OpenAI call in tests and offline demos
    def generate(self, prompt: str, schema: Type[T], *, use_case: str, prompt_name: Optional[str] = None, run_id: Optional[str] = None) -> T:
        return schema.model_validate({
            "bioSuggestion": f"Stub {use_case} bio for {run_id or 'unknown'}.",
            "skillSuggestions": [],
            "techStack": [] if use_case == "candidate_shortlisting" else None,
            "flaggedItems": ["Profile data appears standard."] if use_case == "candidate_shortlisting" else None,
        })


def _generator():
    settings = get_settings()
    provider = (settings.ai_provider or "openai").lower()
    if provider == "stub":
        # Stub provider allowed only in test environment
        if (settings.run_env or "").lower() != "test":
            raise RuntimeError("Stub generation provider is only allowed when RUN_ENV=test")
        return _StubGenerator()
    if provider != "openai":
        raise RuntimeError(f"Unknown AI_PROVIDER: {provider}")
    return None  # enrichment_service builds the OpenAI client


def _parse_project(text: str) -> DashboardProject:
    title, sep, description = text.partition(":")
    return DashboardProject(title=title.strip(), description=description.strip() if sep and description.strip() else None)


def _print(result) -> None:
    print(json.dumps(result.to_contract(), indent=2, ensure_ascii=False))


def cmd_suggest(args):
    request = EnrichmentRequest(
        profile_url=args.url,
        dashboard_skills=list(args.skill or []),
        dashboard_projects=[_parse_project(p) for p in (args.project or [])],
    )
    _print(suggest_profile_enhancements(request, generator=_generator()))


def cmd_shortlist(args):
    _print(shortlist_candidate(args.url, generator=_generator()))


def cmd_validate(args):
    text = Path(args.file).read_text(encoding="utf-8", errors="replace")
    validator = ContentValidator(min_length=args.min_length)
    verdict = validator.classify(RawContent.from_text(text))
    print(json.dumps({"verdict": type(verdict).__name__, "usable": verdict.usable, "detail": verdict.describe()}, indent=2))


def cmd_sources(args):
    import sources  # noqa: F401 ensure registration
    for name in sorted(available_sources()):
        print(name)


def main(argv: Optional[List[str]] = None):
    settings = get_settings()
    init_logging(settings.log_level)
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex

    parser = argparse.ArgumentParser(description="GitTalent profile enrichment CLI")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_sug = sub.add_parser("suggest", help="Suggest a bio and skills from a GitHub profile page and dashboard inputs")
    p_sug.add_argument("--url", required=True, help="GitHub profile URL, e.g. https://github.com/octocat")
    p_sug.add_argument("--skill", action="append", help="Dashboard skill (repeatable)")
    p_sug.add_argument("--project", action="append", help='Dashboard project as "Title: description" (repeatable)')
    p_sug.set_defaults(func=cmd_suggest)

    p_sl = sub.add_parser("shortlist", help="Summarize a candidate from GitHub API data")
    p_sl.add_argument("--url", required=True, help="GitHub profile URL")
    p_sl.set_defaults(func=cmd_shortlist)

    p_val = sub.add_parser("validate", help="Classify a saved profile page with the content validator")
    p_val.add_argument("--file", required=True, help="Path to a saved HTML/text page")
    p_val.add_argument("--min-length", type=int, default=settings.min_content_length, help="Minimum content length")
    p_val.set_defaults(func=cmd_validate)

    p_src = sub.add_parser("sources", help="List registered acquisition strategies")
    p_src.set_defaults(func=cmd_sources)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
