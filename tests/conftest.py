from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from pydantic import ValidationError


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'pipelines.runner'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", json_data: Any = None, reason: str = "OK", headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.text = text
        self.reason = reason
        self.headers = headers or {}
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeSession:
    """Stands in for requests.Session; replies are keyed by URL prefix or are exceptions."""

    def __init__(self, replies: Dict[str, Any]):
        self.replies = replies
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        for prefix in sorted(self.replies, key=len, reverse=True):
            if url.startswith(prefix):
                reply = self.replies[prefix]
                if isinstance(reply, BaseException):
                    raise reply
                return reply
        raise AssertionError(f"Unexpected URL requested: {url}")

    def close(self):
        pass


class RecordingGenerator:
    """GenerationPort double: records every call and replies from a per-use-case table."""

    def __init__(self, replies: Optional[Dict[str, Any]] = None):
        self.replies = replies or {}
        self.calls: List[Dict[str, Any]] = []

    def generate(self, prompt, schema, *, use_case, prompt_name=None, run_id=None):
        self.calls.append({"prompt": prompt, "use_case": use_case, "run_id": run_id})
        reply = self.replies.get(use_case, {"bioSuggestion": f"{use_case} bio", "skillSuggestions": []})
        if isinstance(reply, BaseException):
            raise reply
        try:
            return schema.model_validate(reply)
        except ValidationError as e:
            from ports.generation import GenerationError
            # Same contract as LLMClient: unusable output is a GenerationError
            raise GenerationError(f"{use_case}: {e}") from e

    @property
    def use_cases(self) -> List[str]:
        return [c["use_case"] for c in self.calls]


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("RUN_ENV", "test")
    monkeypatch.delenv("PAGE_HEURISTICS_PATH", raising=False)
    from config.settings import get_settings
    get_settings.cache_clear()
    base = get_settings()
    yield dataclasses.replace(
        base,
        github_hosts=["github.com", "www.github.com"],
        github_api_base_url="https://api.github.com",
        github_repos_per_page=50,
        max_content_length=200_000,
        min_content_length=2_500,
        http_timeout_seconds=5,
    )
    get_settings.cache_clear()


def profile_html(body: str = "", size: int = 5_000) -> str:
    """A plausible public profile page of roughly ``size`` characters."""
    head = "<html><head><title>octocat (The Octocat)</title><script>var x = 1;</script></head><body>"
    content = (
        "<h1>The Octocat</h1><p>Building tools in Go and Rust.</p>"
        "<ul><li>hello-world Go 120 stars</li><li>spoon-knife Rust 80 stars</li></ul>"
        f"{body}"
    )
    tail = "</body></html>"
    filler_len = max(0, size - len(head) - len(content) - len(tail))
    filler = ("<p>" + "repository activity " * 50 + "</p>") * (filler_len // 1007 + 1)
    return (head + content + filler[:filler_len] + tail)
