from __future__ import annotations

import re
from typing import Iterable, Optional, Union
from urllib.parse import quote, urlparse

from models import ProfileIdentifier, ResolutionError


DEFAULT_PROFILE_HOSTS = ("github.com", "www.github.com")
# GitHub logins: alphanumerics and hyphens, not starting with a hyphen, at most 39 chars
USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


def resolve_identifier(
    url: Optional[str],
    hosts: Optional[Iterable[str]] = None,
) -> Union[ProfileIdentifier, ResolutionError]:
    """Extract the username from a GitHub profile URL.

    ``https://github.com/octocat`` and ``https://github.com/octocat/hello-world``
    both resolve to ``octocat``. Pure: no network, same input gives same result.
    """
    original = url if isinstance(url, str) else ""
    allowed = {h.lower() for h in (hosts or DEFAULT_PROFILE_HOSTS)}
    text = original.strip()
    if not text:
        return ResolutionError(original_input=original, reason="empty URL")

    try:
        parsed = urlparse(text)
        host = (parsed.hostname or "").lower()
    except ValueError as e:
        return ResolutionError(original_input=original, reason=f"not a valid URL ({e})")

    if parsed.scheme not in ("http", "https") or not host:
        return ResolutionError(original_input=original, reason="not an absolute http(s) URL")
    if host not in allowed:
        return ResolutionError(original_input=original, reason=f"host '{host}' is not a GitHub profile host")

    parts = [p for p in (parsed.path or "").split("/") if p]
    if not parts:
        return ResolutionError(original_input=original, reason="URL has no username path segment")

    username = parts[0]
    if not USERNAME_RE.match(username):
        return ResolutionError(original_input=original, reason=f"'{username}' is not a valid GitHub username")
    return ProfileIdentifier(
        username=username,
        source_url=text,
        profile_url=f"https://{host}/{quote(username, safe='')}",
    )
