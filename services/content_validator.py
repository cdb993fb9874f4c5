from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from config import page_heuristics
from config.settings import get_settings
from models import (
    ErrorPage,
    LoginPage,
    MalformedUpstream,
    RawContent,
    TooShort,
    Usable,
    ValidationVerdict,
)


@dataclass(frozen=True)
class PageHeuristics:
    """Phrase lists used to spot pages that are not real profile content."""

    login_phrases: List[str] = field(default_factory=lambda: list(page_heuristics.LOGIN_PHRASES))
    error_phrases: List[str] = field(default_factory=lambda: list(page_heuristics.ERROR_PHRASES))
    malformed_signatures: List[str] = field(default_factory=lambda: list(page_heuristics.MALFORMED_SIGNATURES))

    @classmethod
    def from_file(cls, path: str | Path) -> "PageHeuristics":
        """Load lists from JSON; keys that are absent keep their defaults."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Page heuristics file must hold a JSON object: {path}")
        defaults = cls()
        return cls(
            login_phrases=_phrase_list(data.get("login_phrases"), defaults.login_phrases),
            error_phrases=_phrase_list(data.get("error_phrases"), defaults.error_phrases),
            malformed_signatures=_phrase_list(data.get("malformed_signatures"), defaults.malformed_signatures),
        )


def _phrase_list(value: Optional[Iterable[str]], default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    return [str(v) for v in value if str(v).strip()]


def _first_match(haystack: str, phrases: Iterable[str]) -> Optional[str]:
    for phrase in phrases:
        if phrase.lower() in haystack:
            return phrase
    return None


class ContentValidator:
    """Classifies fetched page content before it is handed to a generator.

    Rules, first match wins: too short, login wall, error page, upstream
    serialization error, otherwise usable. No I/O; ``classify`` is a pure
    function of its input and the validator's configuration.
    """

    def __init__(self, min_length: Optional[int] = None, heuristics: Optional[PageHeuristics] = None) -> None:
        if min_length is None or heuristics is None:
            settings = get_settings()
            if min_length is None:
                min_length = settings.min_content_length
            if heuristics is None:
                heuristics = (
                    PageHeuristics.from_file(settings.page_heuristics_path)
                    if settings.page_heuristics_path
                    else PageHeuristics()
                )
        self.min_length = min_length
        self.heuristics = heuristics

    def classify(self, content: RawContent) -> ValidationVerdict:
        text = content.text or ""
        length = len(text)
        if length < self.min_length:
            return TooShort(actual_length=length, minimum=self.min_length)

        lowered = text.lower()
        phrase = _first_match(lowered, self.heuristics.login_phrases)
        if phrase:
            return LoginPage(matched_phrase=phrase)

        phrase = _first_match(lowered, self.heuristics.error_phrases)
        if phrase:
            return ErrorPage(matched_phrase=phrase)

        signature = _first_match(lowered, self.heuristics.malformed_signatures)
        if signature:
            return MalformedUpstream(detail=f"matched signature: '{signature}'")

        return Usable()
