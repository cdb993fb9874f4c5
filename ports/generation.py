from __future__ import annotations

from typing import Optional, Protocol, Type, TypeVar

from pydantic import BaseModel


T = TypeVar("T", bound=BaseModel)


class GenerationError(RuntimeError):
    """The generation capability failed or returned nothing usable."""


class GenerationPort(Protocol):
    def generate(
        self,
        prompt: str,
        schema: Type[T],
        *,
        use_case: str,
        prompt_name: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> T:
        """Return an instance of ``schema`` or raise GenerationError."""
        ...
