from __future__ import annotations

import pytest

from conftest import FakeSession, RecordingGenerator
from models import ProfileIdentifier, ResolutionError
from services.enrichment_service import shortlist_candidate
from services.identifier_resolver import resolve_identifier
from sources.github_api import GitHubApiSource


@pytest.mark.parametrize("url,username", [
    ("https://github.com/octocat", "octocat"),
    ("https://github.com/octocat/", "octocat"),
    ("https://www.github.com/octocat", "octocat"),
    ("http://GitHub.com/octocat/hello-world", "octocat"),
    ("  https://github.com/octo-cat?tab=repositories  ", "octo-cat"),
])
def test_resolves_username_from_first_path_segment(url, username):
    resolved = resolve_identifier(url)
    assert isinstance(resolved, ProfileIdentifier)
    assert resolved.username == username
    assert resolved.profile_url.endswith(f"/{username}")


@pytest.mark.parametrize("url", [
    "https://example.com/x",
    "https://gitlab.com/octocat",
    "https://github.com",
    "https://github.com/",
    "github.com/octocat",
    "not a url",
    "",
])
def test_rejects_foreign_hosts_and_missing_paths(url):
    resolved = resolve_identifier(url)
    assert isinstance(resolved, ResolutionError)
    assert resolved.original_input == url


def test_resolution_is_deterministic():
    assert resolve_identifier("https://github.com/octocat") == resolve_identifier("https://github.com/octocat")
    assert resolve_identifier("https://example.com/x") == resolve_identifier("https://example.com/x")


def test_custom_hosts():
    resolved = resolve_identifier("https://github.example.org/alice", hosts=["github.example.org"])
    assert isinstance(resolved, ProfileIdentifier)
    assert resolved.username == "alice"
    assert isinstance(resolve_identifier("https://github.com/alice", hosts=["github.example.org"]), ResolutionError)


def test_none_input_is_a_resolution_error():
    resolved = resolve_identifier(None)
    assert isinstance(resolved, ResolutionError)
    assert resolved.original_input == ""


@pytest.mark.parametrize("url", [
    "https://github.com/octo%2F..%2F..%2Frate_limit",
    "https://github.com/octo%2Fcat",
    "https://github.com/-octocat",
    "https://github.com/octo_cat",
    "https://github.com/" + "a" * 40,
])
def test_rejects_segments_that_are_not_github_usernames(url):
    resolved = resolve_identifier(url)
    assert isinstance(resolved, ResolutionError)
    assert "not a valid GitHub username" in resolved.reason


def test_encoded_slash_makes_no_api_request(settings):
    session = FakeSession({})
    result = shortlist_candidate(
        "https://github.com/octo%2F..%2F..%2Frate_limit",
        source=GitHubApiSource(settings, session=session), generator=RecordingGenerator(), settings=settings,
    )
    assert session.calls == []
    assert result.bio_suggestion.startswith("Invalid GitHub profile URL.")
