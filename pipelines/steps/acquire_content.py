from __future__ import annotations

import time

from models import AcquisitionError, AcquisitionErrorKind, Failure, FailureKind, RawContent
from pipelines.runner import RunContext, RunState
from ports.source import SourcePort


_FAILURE_KINDS = {
    AcquisitionErrorKind.HTTP_ERROR: FailureKind.HTTP,
    AcquisitionErrorKind.TRANSPORT_ERROR: FailureKind.TRANSPORT,
    AcquisitionErrorKind.API_ERROR: FailureKind.API,
}


class AcquireContent:
    handles = RunState.ACQUIRE

    def __init__(self, source: SourcePort) -> None:
        self.source = source

    def run(self, ctx: RunContext) -> RunContext:
        t0 = time.time()
        result = self.source.acquire(ctx.identifier, log=ctx.log)
        dt = int((time.time() - t0) * 1000)
        ctx.acquisition = result
        ctx.meta["source"] = self.source.source_name
        ctx.meta["acquire_ms"] = dt

        if isinstance(result, AcquisitionError):
            ctx.log.info(
                "Acquisition failed via %s", self.source.source_name,
                extra={"step": "acquire", "status": result.kind.value, "duration_ms": dt},
            )
            ctx.degrade(Failure(kind=_FAILURE_KINDS[result.kind], detail=result.detail))
        elif isinstance(result, RawContent):
            ctx.advance(RunState.VALIDATE)
        else:
            ctx.advance(RunState.GENERATE_PRIMARY)
        return ctx
