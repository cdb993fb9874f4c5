from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from models import (
    AcquisitionResult,
    DashboardContext,
    EnrichmentRequest,
    EnrichmentResult,
    Failure,
    GeneratedProfile,
    ProfileIdentifier,
    ValidationVerdict,
)
from utils.logging_setup import RunLogger, init_logging, run_logger


class RunState(str, Enum):
    RESOLVE = "resolve"
    ACQUIRE = "acquire"
    VALIDATE = "validate"
    GENERATE_PRIMARY = "generate_primary"
    GENERATE_FALLBACK = "generate_fallback"
    DONE = "done"


# Legal forward transitions; anything else is a programming error
TRANSITIONS: dict[RunState, set[RunState]] = {
    RunState.RESOLVE: {RunState.ACQUIRE, RunState.DONE},
    RunState.ACQUIRE: {RunState.VALIDATE, RunState.GENERATE_PRIMARY, RunState.GENERATE_FALLBACK, RunState.DONE},
    RunState.VALIDATE: {RunState.GENERATE_PRIMARY, RunState.GENERATE_FALLBACK, RunState.DONE},
    RunState.GENERATE_PRIMARY: {RunState.DONE},
    RunState.GENERATE_FALLBACK: {RunState.DONE},
    RunState.DONE: set(),
}


@dataclass
class RunContext:
    request: EnrichmentRequest
    state: RunState = RunState.RESOLVE
    identifier: Optional[ProfileIdentifier] = None
    acquisition: Optional[AcquisitionResult] = None
    verdict: Optional[ValidationVerdict] = None
    failure: Optional[Failure] = None
    fallback_failure: Optional[Failure] = None
    generated: Optional[GeneratedProfile] = None
    generated_by: Optional[str] = None  # "primary" | "fallback"
    result: Optional[EnrichmentResult] = None
    meta: dict = field(default_factory=dict)
    log: RunLogger = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.log is None:
            self.log = run_logger(self.request.profile_url)
        self.dashboard: DashboardContext = self.request.dashboard

    @property
    def correlation_id(self) -> str:
        return self.identifier.username if self.identifier else self.request.profile_url

    def advance(self, new_state: RunState) -> None:
        if new_state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal transition {self.state.value} -> {new_state.value}")
        self.log.debug("%s -> %s", self.state.value, new_state.value, extra={"state": new_state.value})
        self.state = new_state

    def degrade(self, failure: Failure) -> None:
        """Primary source unusable: fall back to dashboard data if there is any."""
        self.failure = failure
        self.log.warning(
            "Primary source unusable: %s", failure.detail,
            extra={"status": failure.kind.value, "error": failure.label},
        )
        if self.dashboard.is_empty():
            self.advance(RunState.DONE)
        else:
            self.advance(RunState.GENERATE_FALLBACK)

    def terminate(self, failure: Failure) -> None:
        self.failure = failure
        self.log.warning(
            "Run terminated: %s", failure.detail,
            extra={"status": failure.kind.value, "error": failure.label},
        )
        self.advance(RunState.DONE)


class Step(Protocol):
    handles: RunState

    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    """Runs steps in order; each step only fires while the run is in the state it handles."""

    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            if step.handles != ctx.state:
                continue
            ctx = step.run(ctx)
        if ctx.state != RunState.DONE or ctx.result is None:
            raise RuntimeError(f"Pipeline ended in state {ctx.state.value} without a result")
        return ctx
