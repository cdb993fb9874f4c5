from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _as_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return list(default)
    return [part.strip().lower() for part in value.split(",") if part.strip()]


DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


@dataclass(frozen=True)
class Settings:
    # Profile hosting
    github_hosts: list[str]
    github_api_base_url: str
    github_repos_per_page: int

    # Acquisition limits/timeouts
    http_timeout_seconds: int
    max_content_length: int
    min_content_length: int
    browser_user_agent: str

    # Content heuristics (JSON file overriding config/page_heuristics.py)
    page_heuristics_path: str | None

    # Prompting
    prompt_excerpt_chars: int

    log_level: str

    # Core/runtime
    run_env: str

    # Generation
    ai_provider: str  # openai | stub
    openai_api_key: str | None
    openai_model: str | None

    # Logging/tracing
    llm_trace: bool = False
    llm_log_path: str = "logs/llm_calls.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    ai_provider = os.getenv("AI_PROVIDER", "openai").lower()
    openai_api_key = os.getenv("OPENAI_API_KEY")
    run_env = os.getenv("RUN_ENV", "local")

    if ai_provider == "openai" and not openai_api_key and run_env.lower() != "test":
        raise RuntimeError("OPENAI_API_KEY required when AI_PROVIDER=openai")

    return Settings(
        github_hosts=_as_list(os.getenv("GITHUB_HOSTS"), ["github.com", "www.github.com"]),
        github_api_base_url=os.getenv("GITHUB_API_BASE_URL", "https://api.github.com").rstrip("/"),
        github_repos_per_page=int(os.getenv("GITHUB_REPOS_PER_PAGE", "50")),
        http_timeout_seconds=int(os.getenv("HTTP_TIMEOUT_SECONDS", "20")),
        max_content_length=int(os.getenv("MAX_CONTENT_LENGTH", "200000")),
        min_content_length=int(os.getenv("MIN_CONTENT_LENGTH", "2500")),
        browser_user_agent=os.getenv("BROWSER_USER_AGENT", DEFAULT_BROWSER_USER_AGENT),
        page_heuristics_path=os.getenv("PAGE_HEURISTICS_PATH") or None,
        prompt_excerpt_chars=int(os.getenv("PROMPT_EXCERPT_CHARS", "12000")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=run_env,
        ai_provider=ai_provider,
        openai_api_key=openai_api_key,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        llm_trace=_as_bool(os.getenv("LLM_TRACE", "false")),
        llm_log_path=os.getenv("LLM_LOG_PATH", "logs/llm_calls.jsonl"),
    )
