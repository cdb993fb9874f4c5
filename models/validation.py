from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

from models.failure import FailureKind


class _Verdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    usable: bool = False
    failure_kind: FailureKind | None = None

    def describe(self) -> str:
        raise NotImplementedError


class Usable(_Verdict):
    usable: bool = True

    def describe(self) -> str:
        return "Fetched content looks like a usable profile page"


class TooShort(_Verdict):
    actual_length: int
    minimum: int
    failure_kind: FailureKind = FailureKind.TOO_SHORT

    def describe(self) -> str:
        return f"Fetched content too short (length: {self.actual_length}, minimum: {self.minimum})"


class LoginPage(_Verdict):
    matched_phrase: str
    failure_kind: FailureKind = FailureKind.LOGIN_PAGE

    def describe(self) -> str:
        return f"Fetched content appears to be a login page (matched phrase: '{self.matched_phrase}')"


class ErrorPage(_Verdict):
    matched_phrase: str
    failure_kind: FailureKind = FailureKind.ERROR_PAGE

    def describe(self) -> str:
        return f"Fetched content appears to be an error page (matched phrase: '{self.matched_phrase}')"


class MalformedUpstream(_Verdict):
    detail: str
    failure_kind: FailureKind = FailureKind.MALFORMED_UPSTREAM

    def describe(self) -> str:
        return f"Fetched content is an upstream serialization error, not a profile page ({self.detail})"


ValidationVerdict = Union[Usable, TooShort, LoginPage, ErrorPage, MalformedUpstream]
