from __future__ import annotations

from models import Failure, FailureKind
from pipelines.runner import RunContext, RunState
from services import output_assembler


class AssembleResult:
    handles = RunState.DONE

    def run(self, ctx: RunContext) -> RunContext:
        username = ctx.correlation_id
        if ctx.generated is not None and ctx.generated_by == "primary":
            ctx.result = output_assembler.assemble_primary(ctx.generated, ctx.dashboard, username)
        elif ctx.generated is not None and ctx.generated_by == "fallback":
            ctx.result = output_assembler.assemble_fallback(ctx.generated, ctx.dashboard, ctx.failure, username)
        else:
            failure = ctx.failure or Failure(kind=FailureKind.INTERNAL, detail="run finished without output")
            ctx.result = output_assembler.explain_failure(
                failure, username, dashboard=ctx.dashboard, fallback_failure=ctx.fallback_failure,
            )
        ctx.log.info(
            "Result assembled from %s", ctx.generated_by or "failure explanation",
            extra={"step": "assemble", "status": "ok"},
        )
        return ctx
