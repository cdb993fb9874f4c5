# Importing the strategy modules registers them
from . import github_api, github_page  # noqa: F401
from .registry import available_sources, get_source, register

__all__ = ["available_sources", "get_source", "register"]
