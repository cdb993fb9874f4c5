from .generation import GenerationError, GenerationPort
from .source import ContentShape, SourcePort

__all__ = [
    "GenerationError",
    "GenerationPort",
    "ContentShape",
    "SourcePort",
]
