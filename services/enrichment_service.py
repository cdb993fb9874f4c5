from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from config.settings import Settings, get_settings
from models import EnrichmentRequest, EnrichmentResult, Failure, FailureKind
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import (
    AcquireContent,
    AssembleResult,
    GenerateFallback,
    GeneratePrimary,
    ResolveIdentifier,
    ValidateContent,
)
from ports.generation import GenerationPort
from ports.source import SourcePort
from services.content_validator import ContentValidator
from services.output_assembler import explain_failure
from sources.registry import get_source
import sources  # noqa: F401 ensure registration


logger = logging.getLogger(__name__)

PAGE_STRATEGY = "github_page"
API_STRATEGY = "github_api"


def build_pipeline(
    source: SourcePort,
    generator: GenerationPort,
    validator: Optional[ContentValidator] = None,
    settings: Optional[Settings] = None,
) -> Pipeline:
    settings = settings or get_settings()
    steps = [
        ResolveIdentifier(settings.github_hosts),
        AcquireContent(source),
    ]
    if source.content_shape == "raw":
        steps.append(ValidateContent(validator or ContentValidator()))
    steps.extend([
        GeneratePrimary(generator, settings.prompt_excerpt_chars),
        GenerateFallback(generator),
        AssembleResult(),
    ])
    return Pipeline(steps)


def _reject_request(raw: Any, error: ValidationError) -> EnrichmentResult:
    url = raw.get("profileUrl") if isinstance(raw, dict) else None
    analyzed = url if isinstance(url, str) and url.strip() else "unknown profile"
    fields = ", ".join(".".join(str(p) for p in err["loc"]) or "request" for err in error.errors())
    logger.warning("Rejected enrichment request: %s", fields, extra={"status": "invalid_request"})
    return explain_failure(
        Failure(kind=FailureKind.INVALID_REQUEST, detail=f"invalid or missing field(s): {fields}"),
        analyzed,
    )


def _default_generator(settings: Settings) -> GenerationPort:
    from services.llm_client import LLMClient
    return LLMClient(settings)


def enrich_profile(
    request: Union[EnrichmentRequest, Dict[str, Any]],
    *,
    strategy: str = PAGE_STRATEGY,
    source: Optional[SourcePort] = None,
    generator: Optional[GenerationPort] = None,
    validator: Optional[ContentValidator] = None,
    settings: Optional[Settings] = None,
) -> EnrichmentResult:
    """Run one enrichment and return exactly one EnrichmentResult.

    Upstream problems, malformed request data and defects inside the run all
    come back as explanatory results. Configuration errors still raise: an
    unknown ``strategy`` (KeyError) or a missing OpenAI key (RuntimeError).
    """
    if not isinstance(request, EnrichmentRequest):
        try:
            request = EnrichmentRequest.model_validate(request)
        except ValidationError as e:
            return _reject_request(request, e)
    settings = settings or get_settings()
    source = source or get_source(strategy)
    generator = generator or _default_generator(settings)

    ctx = RunContext(request=request)
    try:
        ctx = build_pipeline(source, generator, validator, settings).run(ctx)
    except Exception as e:  # pipeline boundary: convert defects into an explanatory result
        ctx.log.exception("Enrichment run crashed", extra={"state": ctx.state.value, "error": type(e).__name__})
        return explain_failure(
            Failure(kind=FailureKind.INTERNAL, detail=f"{type(e).__name__}: {e}"),
            ctx.correlation_id,
            dashboard=ctx.dashboard,
        )
    return ctx.result


def suggest_profile_enhancements(
    request: Union[EnrichmentRequest, Dict[str, Any]],
    **kwargs: Any,
) -> EnrichmentResult:
    """Bio and skill suggestions for a developer's own dashboard, from their scraped profile page."""
    kwargs.setdefault("strategy", PAGE_STRATEGY)
    return enrich_profile(request, **kwargs)


def shortlist_candidate(profile_url: str, **kwargs: Any) -> EnrichmentResult:
    """Recruiter summary, tech stack and flagged items from the GitHub API."""
    kwargs.setdefault("strategy", API_STRATEGY)
    return enrich_profile(EnrichmentRequest(profile_url=profile_url), **kwargs)
