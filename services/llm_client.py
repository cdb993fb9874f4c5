from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Dict, List, Optional, Type

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from config.llm_routes import ROUTES
from config.settings import Settings, get_settings
from ports.generation import GenerationError, T
from utils.llm_logger import log_call, sha256_text


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a precise assistant for a developer recruiting platform. Output only valid JSON when asked."


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Best-effort JSON object extraction from a model reply."""
    if not text:
        return None
    candidates: List[str] = [text]
    # Fenced code block
    m = re.search(r"```(?:json)?\s*\n([\s\S]*?)\n```", text)
    if m:
        candidates.append(m.group(1))
    # Outermost curly braces
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


class LLMClient:
    """OpenAI-backed generation capability with per-use-case routing and call tracing."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.http_timeout_seconds * 3)
        return self._client

    def generate(
        self,
        prompt: str,
        schema: Type[T],
        *,
        use_case: str,
        prompt_name: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> T:
        route = ROUTES.get(use_case, {})
        provider = route.get("provider", "openai")
        model = route.get("model") or self.settings.openai_model or "gpt-4o-mini"
        op = route.get("operation", use_case)
        temp = route.get("temperature")

        def _log(status: str, *, duration_ms: Optional[int] = None, error: Optional[str] = None, usage: Optional[Dict[str, Any]] = None) -> None:
            log_call(
                caller=f"llm_client.generate:{use_case}",
                provider=provider,
                model=model,
                operation=op,
                prompt_name=prompt_name or use_case,
                prompt_hash=sha256_text(prompt),
                duration_ms=duration_ms,
                status=status,
                error=error,
                usage=usage,
                run_id=run_id,
                settings=self.settings,
            )

        if provider != "openai":
            raise GenerationError(f"Provider not implemented: {provider}")

        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "response_format": {"type": "json_object"},
        }
        # Only pass temperature if configured (some models only accept default)
        if temp is not None:
            kwargs["temperature"] = temp

        t0 = time.time()
        try:
            resp = self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            dt = int((time.time() - t0) * 1000)
            _log("error", duration_ms=dt, error=str(e))
            raise GenerationError(f"{use_case}: generation call failed: {e}") from e
        dt = int((time.time() - t0) * 1000)

        usage = getattr(resp, "usage", None)
        usage_obj = None
        if usage is not None:
            usage_obj = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }

        content = resp.choices[0].message.content if resp.choices else None
        data = extract_json(content)
        if data is None:
            _log("error", duration_ms=dt, error="no JSON object in reply", usage=usage_obj)
            raise GenerationError(f"{use_case}: generation returned no usable JSON")
        try:
            result = schema.model_validate(data)
        except ValidationError as e:
            _log("error", duration_ms=dt, error="schema validation failed", usage=usage_obj)
            raise GenerationError(f"{use_case}: generation output did not match {schema.__name__}: {e}") from e

        _log("ok", duration_ms=dt, usage=usage_obj)
        logger.debug("Generation ok for %s in %d ms", use_case, dt, extra={"run_id": run_id or "-", "duration_ms": dt})
        return result
