from __future__ import annotations

from typing import Dict, Optional

import requests

from models import AcquisitionError, AcquisitionErrorKind, AcquisitionResult, ProfileIdentifier, RawContent
from sources.base import LogLike, ProfileSource
from sources.registry import register


class GitHubPageSource(ProfileSource):
    """Raw-document strategy: one GET of the public profile page.

    Non-2xx is an ``http_error``, any requests exception (DNS, refused,
    timeout) is a ``transport_error``. Bodies longer than
    ``max_content_length`` are truncated, which is not a failure. No retries.
    """

    source_name = "github_page"
    content_shape = "raw"

    def headers(self) -> Dict[str, str]:
        # Browser-like headers; bare clients are more often served a login wall
        return {
            "User-Agent": self.settings.browser_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def acquire(self, identifier: ProfileIdentifier, log: Optional[LogLike] = None) -> AcquisitionResult:
        log = self._log(log)
        url = identifier.profile_url
        session = self._open_session()
        try:
            log.info("Fetching profile page %s", url, extra={"step": "acquire"})
            resp = session.get(url, headers=self.headers(), timeout=self.settings.http_timeout_seconds)
            if not 200 <= resp.status_code < 300:
                reason = resp.reason or ""
                log.warning(
                    "Profile page fetch failed: %s %s", resp.status_code, reason,
                    extra={"step": "acquire", "status": resp.status_code},
                )
                return AcquisitionError(
                    kind=AcquisitionErrorKind.HTTP_ERROR,
                    status=resp.status_code,
                    detail=(
                        f"HTTP error fetching {url}: {resp.status_code} {reason}".rstrip()
                        + ". The page might be private, require login, or the server might be blocking automated requests."
                    ),
                )
            text = resp.text or ""
        except requests.exceptions.RequestException as e:
            log.warning("Profile page fetch raised: %s", e, extra={"step": "acquire", "error": type(e).__name__})
            return AcquisitionError(
                kind=AcquisitionErrorKind.TRANSPORT_ERROR,
                detail=f"Exception while fetching {url}: {e}",
            )
        finally:
            self._close_session(session)

        max_len = self.settings.max_content_length
        if len(text) > max_len:
            log.info(
                "Profile page is %d chars; truncating to %d", len(text), max_len,
                extra={"step": "acquire"},
            )
            text = text[:max_len]
        log.info("Fetched profile page (%d chars)", len(text), extra={"step": "acquire", "status": "ok"})
        return RawContent.from_text(text, content_type=resp.headers.get("Content-Type"))


def _register():
    register(GitHubPageSource.source_name, GitHubPageSource)


_register()
