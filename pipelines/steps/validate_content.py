from __future__ import annotations

from models import Failure
from pipelines.runner import RunContext, RunState
from services.content_validator import ContentValidator


class ValidateContent:
    handles = RunState.VALIDATE

    def __init__(self, validator: ContentValidator) -> None:
        self.validator = validator

    def run(self, ctx: RunContext) -> RunContext:
        verdict = self.validator.classify(ctx.acquisition)
        ctx.verdict = verdict
        ctx.meta["verdict"] = type(verdict).__name__
        if verdict.usable:
            ctx.log.info("Content usable (%d chars)", ctx.acquisition.length, extra={"step": "validate", "status": "ok"})
            ctx.advance(RunState.GENERATE_PRIMARY)
        else:
            ctx.degrade(Failure(kind=verdict.failure_kind, detail=verdict.describe()))
        return ctx
