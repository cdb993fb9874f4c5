"""Default phrase lists used to classify fetched profile pages.

Matching is case-insensitive substring matching. Override the whole set (or any
single list) with a JSON file named by ``PAGE_HEURISTICS_PATH``::

    {"login_phrases": [...], "error_phrases": [...], "malformed_signatures": [...]}
"""

LOGIN_PHRASES: list[str] = [
    "sign in to github",
    "sign in to continue",
    "username or email address",
    "forgot password?",
    "log in to your account",
    "please log in",
]

ERROR_PHRASES: list[str] = [
    "this is not the web page you are looking for",
    "page not found",
    "404 not found",
    "something went wrong",
    "internal server error",
    "service unavailable",
    "an error occurred",
]

# Upstream serialization failures passed through as if they were page content
MALFORMED_SIGNATURES: list[str] = [
    "unexpected token '<'",
    "is not valid json",
    "unexpected end of json input",
    "[object object]",
    "failed to serialize",
]
