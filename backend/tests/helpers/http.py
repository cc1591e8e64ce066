"""HTTP helper utilities for tests."""

from __future__ import annotations

from urllib.parse import urlencode

API = "/api/v1"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers, with a bearer token when given."""
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def build_url(path: str, **query: str | int | float | None) -> str:
    """Build a URL with encoded query parameters, dropping ``None`` values."""
    qs = urlencode({k: v for k, v in query.items() if v is not None})
    return f"{path}?{qs}" if qs else path


def assert_problem(resp, status: int, code: str) -> dict:
    """Assert ``resp`` is an RFC 7807 problem document and return its body."""
    assert resp.status_code == status, resp.get_data(as_text=True)
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == status
    assert body["code"] == code
    return body
