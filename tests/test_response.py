"""Tests for tern.http.response — immutable Response chaining."""

import pytest

from tern.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.body == ""
        assert r.status == 200
        assert r.content_type is None
        assert r.type == "html"
        assert r.encoding == "UTF-8"
        assert r.headers == ()

    def test_with_status(self) -> None:
        r = Response().with_status(201)
        assert r.status == 201

    def test_with_header(self) -> None:
        r = Response().with_header("X-Custom", "value")
        assert r.headers == (("X-Custom", "value"),)

    def test_chained_headers(self) -> None:
        r = Response().with_header("A", "1").with_header("B", "2")
        assert r.headers == (("A", "1"), ("B", "2"))

    def test_with_headers_dict(self) -> None:
        r = Response().with_headers({"A": "1", "B": "2"})
        assert ("A", "1") in r.headers
        assert ("B", "2") in r.headers

    def test_with_content_type(self) -> None:
        original = Response()
        r = original.with_content_type("text/plain")
        assert r.content_type == "text/plain"
        assert original.content_type is None

    def test_chaining_returns_new_objects(self) -> None:
        r1 = Response("hello")
        r2 = r1.with_status(201)
        r3 = r2.with_header("X-Foo", "bar")

        assert r1.status == 200
        assert r2.status == 201
        assert r2.headers == ()
        assert r3.headers == (("X-Foo", "bar"),)

    def test_body_bytes_from_str(self) -> None:
        r = Response(body="hello")
        assert r.body_bytes == b"hello"

    def test_body_bytes_from_bytes(self) -> None:
        r = Response(body=b"hello")
        assert r.body_bytes == b"hello"

    def test_text_from_str(self) -> None:
        r = Response(body="hello")
        assert r.text == "hello"

    def test_text_from_bytes(self) -> None:
        r = Response(body=b"hello")
        assert r.text == "hello"

    def test_frozen(self) -> None:
        r = Response()
        with pytest.raises(AttributeError):
            r.status = 404  # type: ignore[misc]

    def test_with_type(self) -> None:
        r = Response().with_type("json")
        assert r.type == "json"
        assert r.content_type is None

    def test_with_body(self) -> None:
        r = Response().with_body("rendered")
        assert r.body == "rendered"

    def test_body_bytes_uses_encoding(self) -> None:
        r = Response(body="é", encoding="latin-1")
        assert r.body_bytes == b"\xe9"

    def test_full_chain(self) -> None:
        r = (
            Response("Created")
            .with_status(201)
            .with_header("Location", "/users/42")
            .with_content_type("application/json; charset=UTF-8")
        )
        assert r.body == "Created"
        assert r.status == 201
        assert r.headers == (("Location", "/users/42"),)


class TestHeaderLookup:
    def test_content_type(self) -> None:
        r = Response().with_content_type("text/plain")
        assert r.header("content-type") == "text/plain"

    def test_last_value_wins(self) -> None:
        r = Response().with_header("X-Foo", "1").with_header("x-foo", "2")
        assert r.header("X-FOO") == "2"

    def test_missing(self) -> None:
        assert Response().header("X-Missing") is None
        assert Response().header("Content-Type") is None
