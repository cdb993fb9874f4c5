from __future__ import annotations

from typing import Iterable, Optional

from models import Failure, FailureKind, ResolutionError
from pipelines.runner import RunContext, RunState
from services.identifier_resolver import resolve_identifier


class ResolveIdentifier:
    handles = RunState.RESOLVE

    def __init__(self, hosts: Optional[Iterable[str]] = None) -> None:
        self.hosts = list(hosts) if hosts else None

    def run(self, ctx: RunContext) -> RunContext:
        resolved = resolve_identifier(ctx.request.profile_url, self.hosts)
        if isinstance(resolved, ResolutionError):
            # Fatal before any network activity, dashboard data or not
            ctx.terminate(Failure(kind=FailureKind.RESOLUTION, detail=resolved.describe()))
            return ctx
        ctx.identifier = resolved
        ctx.log = ctx.log.bind(resolved.username)
        ctx.log.info("Resolved username %s", resolved.username, extra={"step": "resolve", "status": "ok"})
        ctx.advance(RunState.ACQUIRE)
        return ctx
