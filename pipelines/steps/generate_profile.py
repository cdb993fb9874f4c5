from __future__ import annotations

import time

from models import Failure, FailureKind, GeneratedProfile, RawContent, StructuredProfile
from pipelines.runner import RunContext, RunState
from ports.generation import GenerationError, GenerationPort
from services import prompts


class GeneratePrimary:
    """One generation attempt over the acquired content; never retried."""

    handles = RunState.GENERATE_PRIMARY

    def __init__(self, generator: GenerationPort, excerpt_chars: int) -> None:
        self.generator = generator
        self.excerpt_chars = excerpt_chars

    def run(self, ctx: RunContext) -> RunContext:
        content = ctx.acquisition
        if isinstance(content, RawContent):
            prompt = prompts.build_page_prompt(ctx.identifier, content, ctx.dashboard, self.excerpt_chars)
            use_case = "profile_enhancement"
        elif isinstance(content, StructuredProfile):
            prompt = prompts.build_api_prompt(ctx.identifier, content, ctx.dashboard)
            use_case = "candidate_shortlisting"
        else:
            raise RuntimeError(f"No usable content to generate from: {type(content).__name__}")

        t0 = time.time()
        try:
            ctx.generated = self.generator.generate(
                prompt, GeneratedProfile, use_case=use_case, prompt_name=use_case, run_id=ctx.correlation_id,
            )
        except GenerationError as e:
            ctx.terminate(Failure(kind=FailureKind.GENERATION, detail=str(e)))
            return ctx
        ctx.generated_by = "primary"
        ctx.log.info(
            "Primary generation done", extra={
                "step": "generate_primary", "status": "ok", "duration_ms": int((time.time() - t0) * 1000),
            },
        )
        ctx.advance(RunState.DONE)
        return ctx


class GenerateFallback:
    """Dashboard-only generation, reached only after the primary source failed."""

    handles = RunState.GENERATE_FALLBACK

    def __init__(self, generator: GenerationPort) -> None:
        self.generator = generator

    def run(self, ctx: RunContext) -> RunContext:
        prompt = prompts.build_fallback_prompt(ctx.identifier, ctx.dashboard)
        t0 = time.time()
        try:
            ctx.generated = self.generator.generate(
                prompt, GeneratedProfile, use_case="dashboard_fallback", prompt_name="dashboard_fallback",
                run_id=ctx.correlation_id,
            )
        except GenerationError as e:
            ctx.fallback_failure = Failure(kind=FailureKind.GENERATION, detail=str(e))
            ctx.log.warning("Fallback generation failed: %s", e, extra={"step": "generate_fallback", "status": "error"})
            ctx.advance(RunState.DONE)
            return ctx
        ctx.generated_by = "fallback"
        ctx.log.info(
            "Fallback generation done", extra={
                "step": "generate_fallback", "status": "ok", "duration_ms": int((time.time() - t0) * 1000),
            },
        )
        ctx.advance(RunState.DONE)
        return ctx
