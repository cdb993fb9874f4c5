from __future__ import annotations

import json

from conftest import profile_html
from models import ErrorPage, LoginPage, MalformedUpstream, RawContent, TooShort, Usable
from services.content_validator import ContentValidator, PageHeuristics


def _classify(text: str, **kwargs):
    validator = ContentValidator(min_length=kwargs.pop("min_length", 2500), heuristics=kwargs.pop("heuristics", PageHeuristics()))
    return validator.classify(RawContent.from_text(text))


def test_usable_profile_page():
    verdict = _classify(profile_html(size=5000))
    assert isinstance(verdict, Usable)
    assert verdict.usable is True


def test_too_short_records_length_and_minimum():
    verdict = _classify("x" * 1800)
    assert isinstance(verdict, TooShort)
    assert (verdict.actual_length, verdict.minimum) == (1800, 2500)
    assert verdict.describe() == "Fetched content too short (length: 1800, minimum: 2500)"


def test_length_check_wins_over_login_phrase():
    verdict = _classify("Sign in to GitHub " * 10)
    assert isinstance(verdict, TooShort)


def test_login_page_matches_case_insensitively():
    verdict = _classify(profile_html("<h2>Sign In To GitHub</h2>"))
    assert isinstance(verdict, LoginPage)
    assert verdict.matched_phrase == "sign in to github"
    assert "sign in to github" in verdict.describe()


def test_login_phrase_wins_over_error_phrase():
    verdict = _classify(profile_html("<p>Page not found</p><p>Sign in to GitHub</p>"))
    assert isinstance(verdict, LoginPage)


def test_error_page():
    verdict = _classify(profile_html("<p>This is not the web page you are looking for.</p>"))
    assert isinstance(verdict, ErrorPage)
    assert verdict.matched_phrase == "this is not the web page you are looking for"


def test_error_phrase_wins_over_malformed_signature():
    verdict = _classify(profile_html("<p>Something went wrong</p><p>Unexpected token '<'</p>"))
    assert isinstance(verdict, ErrorPage)


def test_malformed_upstream():
    verdict = _classify(profile_html("SyntaxError: Unexpected token '<', \"<!DOCTYPE \"... is not valid JSON"))
    assert isinstance(verdict, MalformedUpstream)
    assert "unexpected token '<'" in verdict.detail


def test_classification_is_pure():
    page = RawContent.from_text(profile_html("<p>Page not found</p>"))
    validator = ContentValidator(min_length=2500, heuristics=PageHeuristics())
    first = validator.classify(page)
    assert all(validator.classify(page) == first for _ in range(3))


def test_injected_heuristics():
    heuristics = PageHeuristics(login_phrases=["members only"], error_phrases=[], malformed_signatures=[])
    assert isinstance(_classify(profile_html("Members Only area"), heuristics=heuristics), LoginPage)
    # Default phrases no longer apply
    assert isinstance(_classify(profile_html("Sign in to GitHub"), heuristics=heuristics), Usable)


def test_heuristics_from_file_keeps_defaults_for_missing_keys(tmp_path):
    path = tmp_path / "heuristics.json"
    path.write_text(json.dumps({"error_phrases": ["teapot"]}), encoding="utf-8")
    heuristics = PageHeuristics.from_file(path)
    assert heuristics.error_phrases == ["teapot"]
    assert heuristics.login_phrases == PageHeuristics().login_phrases


def test_validator_reads_settings(monkeypatch, tmp_path):
    path = tmp_path / "heuristics.json"
    path.write_text(json.dumps({"login_phrases": ["restricted"]}), encoding="utf-8")
    monkeypatch.setenv("PAGE_HEURISTICS_PATH", str(path))
    monkeypatch.setenv("MIN_CONTENT_LENGTH", "100")
    from config.settings import get_settings
    get_settings.cache_clear()
    try:
        validator = ContentValidator()
        assert validator.min_length == 100
        assert isinstance(validator.classify(RawContent.from_text("restricted " * 20)), LoginPage)
    finally:
        get_settings.cache_clear()
