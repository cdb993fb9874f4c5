from __future__ import annotations

import dataclasses

import requests

from conftest import FakeResponse, FakeSession, profile_html
from models import AcquisitionError, AcquisitionErrorKind, ProfileIdentifier, RawContent, StructuredProfile
from services.identifier_resolver import resolve_identifier
from sources.github_api import GitHubApiSource
from sources.github_page import GitHubPageSource


OCTOCAT = resolve_identifier("https://github.com/octocat")

USER_JSON = {
    "login": "octocat",
    "name": "The Octocat",
    "bio": "Mascot",
    "location": "San Francisco",
    "public_repos": 8,
    "followers": 100,
    "following": 9,
}

REPOS_JSON = [
    {
        "name": "hello-world", "description": "My first repo", "language": "Go", "stargazers_count": 120,
        "html_url": "https://github.com/octocat/hello-world", "fork": False, "updated_at": "2024-05-01T00:00:00Z",
    },
    {
        "name": "linux", "description": None, "language": "C", "stargazers_count": 0,
        "html_url": "https://github.com/octocat/linux", "fork": True, "updated_at": "2024-04-01T00:00:00Z",
    },
    {
        "name": "spoon-knife", "description": None, "language": None, "stargazers_count": 80,
        "html_url": "https://github.com/octocat/spoon-knife", "fork": False, "updated_at": "2024-03-01T00:00:00Z",
    },
]


# Raw-document strategy

def test_page_fetch_returns_raw_content_with_browser_headers(settings):
    html = profile_html(size=5000)
    session = FakeSession({"https://github.com/octocat": FakeResponse(text=html, headers={"Content-Type": "text/html"})})
    result = GitHubPageSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, RawContent)
    assert result.length == len(html) == 5000
    assert result.content_type == "text/html"
    headers = session.calls[0]["headers"]
    assert headers["User-Agent"].startswith("Mozilla/5.0")
    assert "Accept" in headers and "Accept-Language" in headers
    assert session.calls[0]["timeout"] == settings.http_timeout_seconds


def test_page_fetch_truncates_to_max_length_without_failing(settings):
    session = FakeSession({"https://github.com/octocat": FakeResponse(text="a" * 500_000)})
    result = GitHubPageSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, RawContent)
    assert result.length == 200_000
    assert len(result.text) == 200_000


def test_page_fetch_http_error(settings):
    session = FakeSession({"https://github.com/octocat": FakeResponse(status_code=429, reason="Too Many Requests")})
    result = GitHubPageSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, AcquisitionError)
    assert result.kind == AcquisitionErrorKind.HTTP_ERROR
    assert result.status == 429
    assert "429 Too Many Requests" in result.detail


def test_page_fetch_timeout_is_transport_error(settings):
    session = FakeSession({"https://github.com/octocat": requests.exceptions.Timeout("read timed out")})
    result = GitHubPageSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, AcquisitionError)
    assert result.kind == AcquisitionErrorKind.TRANSPORT_ERROR
    assert "read timed out" in result.detail


def test_page_fetch_makes_exactly_one_request(settings):
    session = FakeSession({"https://github.com/octocat": requests.exceptions.ConnectionError("refused")})
    GitHubPageSource(settings, session=session).acquire(OCTOCAT)
    assert len(session.calls) == 1


# Structured-API strategy

def test_api_fetch_user_and_non_fork_repos(settings):
    session = FakeSession({
        "https://api.github.com/users/octocat/repos": FakeResponse(json_data=REPOS_JSON),
        "https://api.github.com/users/octocat": FakeResponse(json_data=USER_JSON),
    })
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, StructuredProfile)
    assert result.username == "octocat"
    assert result.display_name == "The Octocat"
    assert result.public_repo_count == 8
    assert [r.name for r in result.repositories] == ["hello-world", "spoon-knife"]
    assert all(not r.fork for r in result.repositories)
    assert result.repositories[0].language == "Go"

    repos_call = session.calls[1]
    assert repos_call["params"] == {"type": "owner", "sort": "updated", "per_page": 50}
    assert all(c["headers"] == {"Accept": "application/vnd.github.v3+json"} for c in session.calls)


def test_api_user_404_fails_without_fetching_repos(settings):
    session = FakeSession({
        "https://api.github.com/users/octocat": FakeResponse(status_code=404, reason="Not Found", text='{"message":"Not Found"}'),
    })
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, AcquisitionError)
    assert result.kind == AcquisitionErrorKind.API_ERROR
    assert result.status == 404
    assert "could not be found" in result.detail
    assert len(session.calls) == 1


def test_api_user_transport_error_is_api_error(settings):
    session = FakeSession({"https://api.github.com/users/octocat": requests.exceptions.ConnectionError("dns failure")})
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, AcquisitionError)
    assert result.kind == AcquisitionErrorKind.API_ERROR
    assert "dns failure" in result.detail


def test_api_rate_limited_user_call_keeps_details(settings):
    session = FakeSession({
        "https://api.github.com/users/octocat": FakeResponse(status_code=403, reason="Forbidden", text="API rate limit exceeded"),
    })
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, AcquisitionError)
    assert "403 Forbidden" in result.detail
    assert "API rate limit exceeded" in result.detail


def test_api_repos_failure_degrades_to_empty_list(settings):
    session = FakeSession({
        "https://api.github.com/users/octocat/repos": FakeResponse(status_code=500, reason="Server Error"),
        "https://api.github.com/users/octocat": FakeResponse(json_data=USER_JSON),
    })
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, StructuredProfile)
    assert result.bio == "Mascot"
    assert result.repositories == []


def test_api_repos_timeout_degrades_to_empty_list(settings):
    session = FakeSession({
        "https://api.github.com/users/octocat/repos": requests.exceptions.Timeout("slow"),
        "https://api.github.com/users/octocat": FakeResponse(json_data=USER_JSON),
    })
    result = GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert isinstance(result, StructuredProfile)
    assert result.repositories == []


def test_api_uses_configured_page_size(settings):
    settings = dataclasses.replace(settings, github_repos_per_page=10)
    session = FakeSession({
        "https://api.github.com/users/octocat/repos": FakeResponse(json_data=[]),
        "https://api.github.com/users/octocat": FakeResponse(json_data=USER_JSON),
    })
    GitHubApiSource(settings, session=session).acquire(OCTOCAT)
    assert session.calls[1]["params"]["per_page"] == 10


def test_api_escapes_username_in_request_paths(settings):
    identifier = ProfileIdentifier(username="octo/cat", source_url="x", profile_url="https://github.com/octo%2Fcat")
    session = FakeSession({
        "https://api.github.com/users/octo%2Fcat/repos": FakeResponse(json_data=[]),
        "https://api.github.com/users/octo%2Fcat": FakeResponse(json_data={"login": "octo/cat"}),
    })
    GitHubApiSource(settings, session=session).acquire(identifier)
    assert [c["url"] for c in session.calls] == [
        "https://api.github.com/users/octo%2Fcat",
        "https://api.github.com/users/octo%2Fcat/repos",
    ]
