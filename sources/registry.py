from __future__ import annotations

from typing import Any, Callable, Dict

from ports.source import SourcePort


_REGISTRY: Dict[str, Callable[[], SourcePort]] = {}


def register(name: str, factory: Callable[[], SourcePort]) -> None:
    _REGISTRY[name] = factory


def get_source(name: str) -> SourcePort:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown source: {name}. Available: {sorted(_REGISTRY)}")
    return _REGISTRY[name]()


def available_sources() -> Dict[str, Any]:
    return dict(_REGISTRY)
