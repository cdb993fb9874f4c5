from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from models import (
    AcquisitionError,
    AcquisitionErrorKind,
    AcquisitionResult,
    ProfileIdentifier,
    Repository,
    StructuredProfile,
)
from sources.base import LogLike, ProfileSource
from sources.registry import register


API_HEADERS = {"Accept": "application/vnd.github.v3+json"}


def _error_excerpt(resp: requests.Response, limit: int = 100) -> str:
    try:
        return (resp.text or "")[:limit]
    except (AttributeError, UnicodeDecodeError):
        return ""


def _to_repository(raw: Dict[str, Any]) -> Optional[Repository]:
    if not raw.get("name") or not raw.get("html_url"):
        return None
    return Repository(
        name=raw["name"],
        description=raw.get("description"),
        language=raw.get("language"),
        stargazers_count=int(raw.get("stargazers_count") or 0),
        html_url=raw["html_url"],
        fork=bool(raw.get("fork")),
        updated_at=raw.get("updated_at"),
    )


class GitHubApiSource(ProfileSource):
    """Structured strategy: GitHub REST user + owned repositories.

    The user call gates acquisition; the repos call only enriches it, so its
    failure yields the user fields with an empty repository list. Forks are
    dropped.
    """

    source_name = "github_api"
    content_shape = "structured"

    def acquire(self, identifier: ProfileIdentifier, log: Optional[LogLike] = None) -> AcquisitionResult:
        log = self._log(log)
        username = identifier.username
        base = self.settings.github_api_base_url
        timeout = self.settings.http_timeout_seconds
        session = self._open_session()
        try:
            log.info("Fetching GitHub user %s", username, extra={"step": "acquire"})
            try:
                user_resp = session.get(f"{base}/users/{quote(username, safe='')}", headers=API_HEADERS, timeout=timeout)
            except requests.exceptions.RequestException as e:
                log.warning("GitHub user request raised: %s", e, extra={"step": "acquire", "error": type(e).__name__})
                return AcquisitionError(
                    kind=AcquisitionErrorKind.API_ERROR,
                    detail=f"Request for GitHub user '{username}' failed: {e}",
                )

            if not 200 <= user_resp.status_code < 300:
                return self._user_error(username, user_resp, log)

            try:
                user = user_resp.json()
            except ValueError as e:
                return AcquisitionError(
                    kind=AcquisitionErrorKind.API_ERROR,
                    status=user_resp.status_code,
                    detail=f"GitHub API returned an unreadable user payload for '{username}': {e}",
                )
            if not isinstance(user, dict):
                return AcquisitionError(
                    kind=AcquisitionErrorKind.API_ERROR,
                    status=user_resp.status_code,
                    detail=f"GitHub API returned an unexpected user payload for '{username}'",
                )
            log.info(
                "Fetched GitHub user %s; public repos: %s", username, user.get("public_repos"),
                extra={"step": "acquire", "status": "ok"},
            )

            repositories = self._fetch_repositories(session, username, log)
        finally:
            self._close_session(session)

        return StructuredProfile(
            username=user.get("login") or username,
            bio=user.get("bio"),
            display_name=user.get("name"),
            location=user.get("location"),
            public_repo_count=int(user.get("public_repos") or 0),
            followers=int(user.get("followers") or 0),
            following=int(user.get("following") or 0),
            repositories=repositories,
        )

    def _user_error(self, username: str, resp: requests.Response, log: LogLike) -> AcquisitionError:
        reason = resp.reason or ""
        status = resp.status_code
        log.warning(
            "GitHub user request failed for %s: %s %s", username, status, reason,
            extra={"step": "acquire", "status": status},
        )
        if status == 404:
            detail = f"GitHub user '{username}' could not be found (HTTP 404 {reason or 'Not Found'})."
        else:
            detail = (
                f"GitHub API error for user profile: {status} {reason}. "
                f"User might not exist or API limit reached. Details: {_error_excerpt(resp)}"
            )
        return AcquisitionError(kind=AcquisitionErrorKind.API_ERROR, status=status, detail=detail)

    def _fetch_repositories(self, session: requests.Session, username: str, log: LogLike) -> List[Repository]:
        params = {"type": "owner", "sort": "updated", "per_page": self.settings.github_repos_per_page}
        url = f"{self.settings.github_api_base_url}/users/{quote(username, safe='')}/repos"
        try:
            resp = session.get(url, params=params, headers=API_HEADERS, timeout=self.settings.http_timeout_seconds)
        except requests.exceptions.RequestException as e:
            log.warning("Repository request raised; continuing without repos: %s", e, extra={"step": "acquire"})
            return []
        if not 200 <= resp.status_code < 300:
            log.warning(
                "Could not fetch repositories for %s: %s %s", username, resp.status_code, resp.reason or "",
                extra={"step": "acquire", "status": resp.status_code},
            )
            return []
        try:
            payload = resp.json()
        except ValueError as e:
            log.warning("Repository payload unreadable; continuing without repos: %s", e, extra={"step": "acquire"})
            return []
        if not isinstance(payload, list):
            return []

        repositories = []
        for raw in payload:
            if not isinstance(raw, dict) or raw.get("fork"):
                continue
            repo = _to_repository(raw)
            if repo is not None:
                repositories.append(repo)
        log.info(
            "Fetched %d repositories for %s (%d non-fork)", len(payload), username, len(repositories),
            extra={"step": "acquire"},
        )
        return repositories


def _register():
    register(GitHubApiSource.source_name, GitHubApiSource)


_register()
