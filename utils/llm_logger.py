from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from config.settings import Settings


logger = logging.getLogger(__name__)


def sha256_text(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def log_call(
    *,
    caller: str,
    provider: str,
    model: Optional[str],
    operation: str,
    prompt_name: Optional[str] = None,
    prompt_hash: Optional[str] = None,
    duration_ms: Optional[int] = None,
    status: str = "ok",
    error: Optional[str] = None,
    usage: Optional[Dict[str, Any]] = None,
    run_id: Optional[str] = None,
    extras: Optional[Dict[str, Any]] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Append a single JSON line describing a generation call if tracing is enabled.

    Controlled by LLM_TRACE / LLM_LOG_PATH in config/settings.py. Callers holding
    their own Settings pass them; otherwise the process-wide settings apply.
    """
    if settings is None:
        from config.settings import get_settings
        settings = get_settings()
    if not settings.llm_trace:
        return

    log_path = Path(settings.llm_log_path)

    payload: Dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "caller": caller,
        "provider": provider,
        "model": model,
        "operation": operation,
        "prompt_name": prompt_name,
        "prompt_hash": prompt_hash,
        "duration_ms": duration_ms,
        "status": status,
        "error": error,
        "usage": usage or {},
    }
    # Correlate with the pipeline run; RUN_ID env is set by the CLI
    run_id = run_id or os.getenv("RUN_ID")
    if run_id:
        payload["run_id"] = run_id

    if extras:
        # Shallow merge extras under a dedicated key to avoid collisions
        payload["extras"] = extras

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")
    except OSError as e:
        # Tracing must never break a run
        logger.warning("LLM trace write failed: %s", e, extra={"error": str(e)})
