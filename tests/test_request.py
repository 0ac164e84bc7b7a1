"""Tests for tern.http.request — frozen Request, Accept parsing, detectors."""

import pytest

from tern.http.headers import Headers
from tern.http.request import Request

IPHONE_UA = "Mozilla/5.0 (iPhone; U; CPU like Mac OS X; en) Mobile/1A543a Safari/419.3"


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _request(**headers: str) -> Request:
    values = {name.replace("_", "-"): value for name, value in headers.items()}
    return Request(headers=Headers.from_mapping(values))


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/users", scheme="https"))
        assert req.method == "POST"
        assert req.path == "/users"
        assert req.scheme == "https"
        assert req.params == {}

    def test_headers(self) -> None:
        scope = _make_scope(headers=[(b"accept", b"application/json")])
        req = Request.from_asgi(scope)
        assert req.headers["Accept"] == "application/json"

    def test_route_params(self) -> None:
        req = Request.from_asgi(_make_scope(), {"type": "json", "controller": "posts"})
        assert req.type == "json"
        assert req.params["controller"] == "posts"

    def test_frozen(self) -> None:
        req = Request()
        with pytest.raises(AttributeError):
            req.method = "POST"  # type: ignore[misc]


class TestRequestProperties:
    def test_type(self) -> None:
        assert Request().type is None
        assert Request(params={"type": ""}).type is None
        assert Request(params={"type": "json"}).type == "json"

    def test_user_agent(self) -> None:
        assert Request().user_agent == ""
        assert _request(User_Agent="probe").user_agent == "probe"

    def test_mobile(self) -> None:
        assert _request(User_Agent=IPHONE_UA).is_mobile
        assert _request(User_Agent="Mozilla/5.0 (Android 14; Mobile)").is_mobile
        assert not _request(User_Agent="Mozilla/5.0 (X11; Linux x86_64)").is_mobile

    def test_ajax(self) -> None:
        assert _request(X_Requested_With="XMLHttpRequest").is_ajax
        assert not Request().is_ajax

    def test_secure(self) -> None:
        assert Request(scheme="https").is_secure
        assert _request(X_Forwarded_Proto="https").is_secure
        assert not Request().is_secure

    def test_accepts(self) -> None:
        assert Request().accepts() == ["text/html"]
        assert _request(Accept="application/json").accepts() == ["application/json"]


class TestDetectors:
    def test_methods(self) -> None:
        assert Request(method="POST").is_("post")
        assert Request().is_("GET")
        assert not Request().is_("delete")

    def test_named(self) -> None:
        assert _request(User_Agent=IPHONE_UA).is_("mobile")
        assert Request(scheme="https").is_("ssl")
        assert _request(X_Requested_With="XMLHttpRequest").is_("ajax")

    def test_unknown_detector(self) -> None:
        assert Request().is_("flying") is False


class TestGet:
    def test_header_lookup(self) -> None:
        assert _request(X_Api_Version="2").get("http:x-api-version") == "2"
        assert Request().get("http:x-missing") is None

    def test_param_lookup(self) -> None:
        assert Request(params={"admin": True}).get("params:admin") is True

    def test_unknown_source(self) -> None:
        assert Request().get("env:HOME") is None
        assert Request().get("plain") is None
